"""Test scaffolding for the generated service.

Writes a testify suite for the HTTP handlers, gomock-ready interfaces for
the selected backing stores, a database test suite and ``docs/TESTING.md``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console

from .plan import RenderTarget, render_targets
from .templates import TemplateRenderer


class TestSuiteGenerator:
    """Generates Go test files, mock interfaces and the testing guide."""

    # pytest would otherwise try to collect this class
    __test__ = False

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def targets(self, context: dict[str, Any]) -> list[RenderTarget]:
        dbs = context.get("db", {})
        targets = [
            RenderTarget(
                template="testing/handlers_test.go.j2",
                output="internal/handlers/handlers_test.go",
                step="testing",
            ),
        ]
        if dbs.get("postgres") or dbs.get("redis"):
            targets.append(
                RenderTarget(
                    template="testing/interfaces.go.j2",
                    output="internal/mocks/interfaces.go",
                    step="testing",
                )
            )
        if context.get("needs_database"):
            targets.append(
                RenderTarget(
                    template="testing/database_test.go.j2",
                    output="internal/database/database_test.go",
                    step="testing",
                )
            )
        targets.append(
            RenderTarget(template="testing/TESTING.md.j2", output="docs/TESTING.md", step="testing")
        )
        return targets

    async def generate(
        self,
        output_dir: Path,
        context: dict[str, Any],
        console: Console | None = None,
    ) -> list[Path]:
        """Write the test scaffolding into *output_dir*."""
        return await render_targets(
            self.renderer, output_dir, self.targets(context), context, console
        )
