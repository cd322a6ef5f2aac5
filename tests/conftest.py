"""Shared pytest fixtures for the go-template-sh test suite.

Provides reusable fixtures for:
- Project options with sensible test defaults
- A template context built from those options
- A mock TemplateRenderer that records render_to_file calls
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from go_template_sh.config import ProjectConfig
from go_template_sh.scaffolder.generator import ProjectGenerator
from go_template_sh.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Project options
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config() -> Callable[..., ProjectConfig]:
    """Factory for ProjectConfig; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> ProjectConfig:
        options: dict[str, Any] = {"project_name": "test-service"}
        options.update(overrides)
        return ProjectConfig(**options)

    return _make


@pytest.fixture
def project_config(make_config) -> ProjectConfig:
    return make_config()


@pytest.fixture
def make_context(make_config) -> Callable[..., dict[str, Any]]:
    """Factory for a full template context built the way the generator builds it."""

    def _make(**overrides: Any) -> dict[str, Any]:
        return ProjectGenerator(make_config(**overrides)).build_context()

    return _make


@pytest.fixture
def basic_context(make_context) -> dict[str, Any]:
    return make_context()


# ---------------------------------------------------------------------------
# Renderer doubles
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_renderer() -> MagicMock:
    """A mock TemplateRenderer that tracks render_to_file calls."""
    renderer = MagicMock(spec=TemplateRenderer)

    async def mock_render_to_file(template_path: str, output_path, context):
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(f"// Rendered from {template_path}\n", encoding="utf-8")
        return out

    renderer.render_to_file = AsyncMock(side_effect=mock_render_to_file)
    return renderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    """The real renderer over the packaged templates."""
    return TemplateRenderer()
