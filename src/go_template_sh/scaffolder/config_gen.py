"""Runtime configuration files for the generated service.

The shape of ``internal/config/config.go`` depends on the config format:

* ``env``: a flat ``Config`` struct populated from environment variables,
  with optional ``.env`` loading through godotenv.
* ``yaml`` / ``json`` / ``toml``: a nested struct hierarchy decoded from
  ``config.<ext>`` (path overridable with ``CONFIG_PATH``), environment
  overrides for ``ENVIRONMENT`` and ``PORT``, and getter methods so the rest
  of the code can stay format agnostic.

Structured formats also get a ``config.<ext>.example``; every format gets a
``.env.example``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console

from go_template_sh.config import ConfigFormat

from .plan import RenderTarget, render_targets
from .templates import TemplateRenderer


class ConfigGenerator:
    """Generates the config loader, example config file and .env.example."""

    _EXAMPLE_TEMPLATES: dict[ConfigFormat, str] = {
        ConfigFormat.YAML: "config/config.yaml.example.j2",
        ConfigFormat.JSON: "config/config.json.example.j2",
        ConfigFormat.TOML: "config/config.toml.example.j2",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def targets(self, context: dict[str, Any]) -> list[RenderTarget]:
        fmt = ConfigFormat.parse(context.get("config_format"))
        if fmt.structured:
            loader = "config/config_structured.go.j2"
        else:
            loader = "config/config_env.go.j2"

        targets = [
            RenderTarget(template=loader, output="internal/config/config.go", step="config"),
        ]
        if fmt.structured:
            targets.append(
                RenderTarget(
                    template=self._EXAMPLE_TEMPLATES[fmt],
                    output=f"config.{fmt.value}.example",
                    step="config",
                )
            )

        env_template = "config/env.example.j2" if context.get("env_sample", True) else "config/env_minimal.example.j2"
        targets.append(RenderTarget(template=env_template, output=".env.example", step="config"))
        return targets

    async def generate(
        self,
        output_dir: Path,
        context: dict[str, Any],
        console: Console | None = None,
    ) -> list[Path]:
        """Write the config loader and example files into *output_dir*."""
        return await render_targets(
            self.renderer, output_dir, self.targets(context), context, console
        )
