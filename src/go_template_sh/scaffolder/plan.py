"""Render plan primitives shared by the project generator and its helpers.

A ``RenderTarget`` pairs a template with the project-relative file it
produces.  Every generator exposes ``targets(context)`` so the full set of
files is known before anything is written, and renders those exact targets
through :func:`render_targets`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a generation step fails; the first failure aborts the run."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


# ---------------------------------------------------------------------------
# Render targets
# ---------------------------------------------------------------------------


class RenderTarget(BaseModel):
    """One file of the generated project."""

    model_config = ConfigDict(frozen=True)

    template: str = Field(..., description="Template path relative to the template root")
    output: str = Field(..., description="Output path relative to the project root (POSIX)")
    step: str = Field(default="render", description="Generation step the file belongs to")


async def render_targets(
    renderer: TemplateRenderer,
    root: Path,
    targets: Iterable[RenderTarget],
    context: dict[str, Any],
    console: Console | None = None,
) -> list[Path]:
    """Render *targets* below *root* in order.

    Args:
        renderer: Template renderer to use.
        root: Project root directory.
        targets: Files to produce.
        context: Template context shared by all targets.
        console: When given, each written file is reported on it.

    Returns:
        Paths of the written files, in the order they were written.

    Raises:
        ScaffoldError: A template failed to render or a file could not be
            written.
    """
    written: list[Path] = []
    for target in targets:
        try:
            path = await renderer.render_to_file(target.template, root / target.output, context)
        except TemplateError as exc:
            raise ScaffoldError(target.step, f"failed to render {target.template}: {exc}") from exc
        except OSError as exc:
            raise ScaffoldError(target.step, f"failed to write {target.output}: {exc}") from exc
        written.append(path)
        if console is not None:
            console.print(f"  [dim]Created:[/dim] {target.output}")
    return written
