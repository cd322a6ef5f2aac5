"""CI/CD pipeline generation (GitHub Actions or GitLab CI)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console

from go_template_sh.config import CIProvider

from .plan import RenderTarget, render_targets
from .templates import TemplateRenderer


class CIGenerator:
    """Generates the pipeline definition for the selected CI provider."""

    _CI_FILES: dict[CIProvider, tuple[str, str]] = {
        CIProvider.GITHUB: ("ci/github-ci.yml.j2", ".github/workflows/ci.yml"),
        CIProvider.GITLAB: ("ci/gitlab-ci.yml.j2", ".gitlab-ci.yml"),
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def targets(self, context: dict[str, Any]) -> list[RenderTarget]:
        provider = CIProvider(context.get("ci", ""))
        if provider not in self._CI_FILES:
            return []
        template, output = self._CI_FILES[provider]
        return [RenderTarget(template=template, output=output, step="ci")]

    async def generate(
        self,
        output_dir: Path,
        context: dict[str, Any],
        console: Console | None = None,
    ) -> list[Path]:
        """Write the CI pipeline file, if a provider is selected."""
        return await render_targets(
            self.renderer, output_dir, self.targets(context), context, console
        )
