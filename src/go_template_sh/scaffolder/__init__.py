"""Go project scaffolding: render plan, templates and the generators."""

from .config_ref import FIELD_CATALOG, ConfigFieldResolver, UnknownConfigFieldError, resolve_field
from .generator import ProjectGenerator, build_dependencies
from .plan import RenderTarget, ScaffoldError, render_targets
from .templates import TemplateRenderer

__all__ = [
    "FIELD_CATALOG",
    "ConfigFieldResolver",
    "ProjectGenerator",
    "RenderTarget",
    "ScaffoldError",
    "TemplateRenderer",
    "UnknownConfigFieldError",
    "build_dependencies",
    "render_targets",
    "resolve_field",
]
