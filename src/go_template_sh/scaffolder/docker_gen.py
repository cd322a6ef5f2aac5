"""Container files for the generated service.

Produces a multi-stage ``Dockerfile``, a ``docker-compose.yml`` that starts
the service together with every selected backing store (and Jaeger when
tracing is on), and a ``.dockerignore``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console

from .plan import RenderTarget, render_targets
from .templates import TemplateRenderer


class DockerGenerator:
    """Generates Dockerfile, docker-compose.yml and .dockerignore."""

    # Template name -> output file name
    _DOCKER_FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
        "docker/dockerignore.j2": ".dockerignore",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def targets(self, context: dict[str, Any]) -> list[RenderTarget]:
        """Files this generator writes for *context* (none without Docker)."""
        if not context.get("include_docker", False):
            return []
        return [
            RenderTarget(template=template, output=output, step="docker")
            for template, output in self._DOCKER_FILES.items()
        ]

    async def generate(
        self,
        output_dir: Path,
        context: dict[str, Any],
        console: Console | None = None,
    ) -> list[Path]:
        """Generate the Docker files into *output_dir*.

        Args:
            output_dir: Project root directory.
            context: Template rendering context.
            console: Optional console to report created files on.

        Returns:
            List of written file paths (empty if Docker is disabled).
        """
        return await render_targets(
            self.renderer, output_dir, self.targets(context), context, console
        )
