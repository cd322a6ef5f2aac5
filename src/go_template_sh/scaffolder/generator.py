"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a complete Go microservice under
``<output_dir>/<project_name>/``: module definition, entry point, config
loader, HTTP server for the chosen framework, handlers, middleware,
observability, database and cache clients, build tooling, container and CI
files, and test scaffolding.

The set of files is computed up front by :meth:`ProjectGenerator.plan`;
:meth:`ProjectGenerator.generate` writes exactly that plan.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from rich.console import Console

from go_template_sh.config import Database, Framework, Logger, ProjectConfig

from .ci_gen import CIGenerator
from .config_gen import ConfigGenerator
from .config_ref import ConfigFieldResolver
from .docker_gen import DockerGenerator
from .plan import RenderTarget, ScaffoldError, render_targets
from .templates import TemplateRenderer
from .testing_gen import TestSuiteGenerator


# ---------------------------------------------------------------------------
# Go module versions
# ---------------------------------------------------------------------------

FRAMEWORK_MODULES: dict[Framework, str] = {
    Framework.CHI: "github.com/go-chi/chi/v5 v5.0.11",
    Framework.GIN: "github.com/gin-gonic/gin v1.10.0",
    Framework.ECHO: "github.com/labstack/echo/v4 v4.11.4",
    Framework.FIBER: "github.com/gofiber/fiber/v2 v2.52.0",
}

LOGGER_MODULES: dict[Logger, str] = {
    Logger.ZAP: "go.uber.org/zap v1.26.0",
    Logger.ZEROLOG: "github.com/rs/zerolog v1.32.0",
}

DATABASE_MODULES: dict[Database, str] = {
    Database.POSTGRES: "github.com/jackc/pgx/v5 v5.5.1",
    Database.MYSQL: "github.com/go-sql-driver/mysql v1.7.1",
    Database.MONGODB: "go.mongodb.org/mongo-driver v1.13.1",
    Database.REDIS: "github.com/redis/go-redis/v9 v9.4.0",
}

UUID_MODULE = "github.com/google/uuid v1.6.0"

TRACING_MODULES: tuple[str, ...] = (
    "go.opentelemetry.io/otel v1.22.0",
    "go.opentelemetry.io/otel/sdk v1.22.0",
    "go.opentelemetry.io/otel/trace v1.22.0",
    "go.opentelemetry.io/otel/exporters/otlp/otlptrace/otlptracegrpc v1.22.0",
)

METRICS_MODULE = "github.com/prometheus/client_golang v1.18.0"

CONFIG_FORMAT_MODULES: dict[str, str] = {
    "env": "github.com/joho/godotenv v1.5.1",
    "yaml": "gopkg.in/yaml.v3 v3.0.1",
    "toml": "github.com/BurntSushi/toml v1.3.2",
}

TEST_MODULES: tuple[str, ...] = (
    "github.com/stretchr/testify v1.8.4",
    "go.uber.org/mock v0.4.0",
)

# Go type of the logger handed around the generated code
_LOGGER_TYPES: dict[Logger, str] = {
    Logger.SLOG: "*slog.Logger",
    Logger.ZAP: "*zap.Logger",
    Logger.ZEROLOG: "*zerolog.Logger",
}


def build_dependencies(config: ProjectConfig) -> list[str]:
    """Return the ``require`` entries of the generated ``go.mod``.

    Each entry is ``"<module path> <version>"``.  Order is stable:
    framework, logger, drivers, uuid, tracing, metrics, config format
    library, then test libraries.
    """
    deps: list[str] = []

    if config.framework in FRAMEWORK_MODULES:
        deps.append(FRAMEWORK_MODULES[config.framework])
    if config.logger in LOGGER_MODULES:
        deps.append(LOGGER_MODULES[config.logger])

    for db in Database:
        if config.has_database(db):
            deps.append(DATABASE_MODULES[db])

    deps.append(UUID_MODULE)

    if config.enable_tracing:
        deps.extend(TRACING_MODULES)
    if config.enable_metrics:
        deps.append(METRICS_MODULE)

    fmt_module = CONFIG_FORMAT_MODULES.get(config.config_format.value)
    if fmt_module:
        deps.append(fmt_module)

    deps.extend(TEST_MODULES)
    return deps


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, generates a Go service containing:
    - go.mod and the ``cmd/<name>`` entry point with graceful shutdown
    - env or structured (YAML/JSON/TOML) configuration loading
    - an HTTP server for stdlib, chi, gin, echo or fiber
    - handlers, middleware, logging, tracing and metrics
    - database and cache clients for the selected stores
    - Makefile, README, .gitignore, Docker and CI files
    - handler tests, mock interfaces and a testing guide
    """

    def __init__(self, config: ProjectConfig, console: Console | None = None) -> None:
        self.config = config
        self.console = console
        self.renderer = TemplateRenderer()
        self.config_gen = ConfigGenerator(self.renderer)
        self.docker_gen = DockerGenerator(self.renderer)
        self.ci_gen = CIGenerator(self.renderer)
        self.testing_gen = TestSuiteGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def plan(self) -> list[RenderTarget]:
        """Return every file :meth:`generate` will write, in write order."""
        ctx = self.build_context()
        return [
            *self._entrypoint_targets(ctx),
            *self.config_gen.targets(ctx),
            *self._internal_targets(ctx),
            *self._project_targets(ctx),
            *self.docker_gen.targets(ctx),
            *self.ci_gen.targets(ctx),
            *self._gitignore_targets(ctx),
            *self.testing_gen.targets(ctx),
        ]

    def directories(self) -> list[str]:
        """Project-relative directories created before any file is written."""
        dirs = [
            f"cmd/{self.config.project_name}",
            "internal/config",
            "internal/server",
            "internal/handlers",
            "internal/middleware",
            "internal/observability",
            "pkg",
        ]
        if self.config.needs_database:
            dirs.append("internal/database")
        if self.config.needs_cache:
            dirs.append("internal/cache")
        dirs.extend(["internal/mocks", "docs"])
        return dirs

    async def generate(self, output_dir: str | Path) -> Path:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.  A subdirectory named after the project is created
                inside it; existing files are overwritten.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: A directory could not be created or a file could
                not be rendered or written.
        """
        project_root = self.config.project_dir(output_dir)
        ctx = self.build_context()

        # 1. Skeleton directories
        await self._create_directory_structure(project_root)

        # 2. go.mod and entry point
        await self._render(project_root, self._entrypoint_targets(ctx), ctx)

        # 3. Config loader, example config, .env.example
        await self.config_gen.generate(project_root, ctx, self.console)

        # 4. internal/ packages
        await self._render(project_root, self._internal_targets(ctx), ctx)

        # 5. Makefile and README
        await self._render(project_root, self._project_targets(ctx), ctx)

        # 6. Container files
        await self.docker_gen.generate(project_root, ctx, self.console)

        # 7. CI pipeline
        await self.ci_gen.generate(project_root, ctx, self.console)

        # 8. .gitignore
        await self._render(project_root, self._gitignore_targets(ctx), ctx)

        # 9. Test scaffolding
        await self.testing_gen.generate(project_root, ctx, self.console)

        return project_root

    # -- Context building --------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        cfg = self.config
        fmt = cfg.config_format

        return {
            "project_name": cfg.project_name,
            "module_path": cfg.module_path,
            "go_version": cfg.go_version,
            "framework": cfg.framework.value,
            "logger": cfg.logger.value,
            "logger_type": _LOGGER_TYPES[cfg.logger],
            "config_format": fmt.value,
            "structured_config": cfg.structured_config,
            "databases": [db.value for db in cfg.databases],
            "db": {db.value: cfg.has_database(db) for db in Database},
            "needs_sql": cfg.needs_sql,
            "needs_nosql": cfg.needs_nosql,
            "needs_cache": cfg.needs_cache,
            "needs_database": cfg.needs_database,
            "enable_tracing": cfg.enable_tracing,
            "enable_metrics": cfg.enable_metrics,
            "metrics_enabled": "cfg.IsMetricsEnabled()" if fmt.structured else "cfg.MetricsEnabled",
            "metrics_path": "cfg.GetMetricsPath()" if fmt.structured else '"/metrics"',
            "include_docker": cfg.include_docker,
            "ci": cfg.ci.value,
            "env_sample": cfg.env_sample,
            "dependencies": build_dependencies(cfg),
            "config_ref": ConfigFieldResolver(fmt),
        }

    # -- Render plan pieces ------------------------------------------------

    def _entrypoint_targets(self, ctx: dict[str, Any]) -> list[RenderTarget]:
        return [
            RenderTarget(template="go/go.mod.j2", output="go.mod", step="module"),
            RenderTarget(
                template="go/main.go.j2",
                output=f"cmd/{ctx['project_name']}/main.go",
                step="module",
            ),
        ]

    def _internal_targets(self, ctx: dict[str, Any]) -> list[RenderTarget]:
        targets = [
            RenderTarget(
                template=f"go/server/server_{ctx['framework']}.go.j2",
                output="internal/server/server.go",
                step="server",
            ),
            RenderTarget(
                template="go/handlers.go.j2",
                output="internal/handlers/handlers.go",
                step="handlers",
            ),
            RenderTarget(
                template="go/middleware.go.j2",
                output="internal/middleware/middleware.go",
                step="middleware",
            ),
            RenderTarget(
                template="go/observability.go.j2",
                output="internal/observability/observability.go",
                step="observability",
            ),
            RenderTarget(
                template=f"go/logger/logger_{ctx['logger']}.go.j2",
                output="internal/observability/logger.go",
                step="observability",
            ),
        ]
        for name in ("postgres", "mysql", "mongodb"):
            if ctx["db"][name]:
                targets.append(
                    RenderTarget(
                        template=f"go/database/{name}.go.j2",
                        output=f"internal/database/{name}.go",
                        step="database",
                    )
                )
        if ctx["needs_cache"]:
            targets.append(
                RenderTarget(
                    template="go/cache/redis.go.j2",
                    output="internal/cache/redis.go",
                    step="cache",
                )
            )
        return targets

    def _project_targets(self, ctx: dict[str, Any]) -> list[RenderTarget]:
        return [
            RenderTarget(template="project/Makefile.j2", output="Makefile", step="project"),
            RenderTarget(template="project/README.md.j2", output="README.md", step="project"),
        ]

    def _gitignore_targets(self, ctx: dict[str, Any]) -> list[RenderTarget]:
        return [RenderTarget(template="project/gitignore.j2", output=".gitignore", step="project")]

    # -- Writing -----------------------------------------------------------

    async def _render(self, root: Path, targets: list[RenderTarget], ctx: dict[str, Any]) -> list[Path]:
        return await render_targets(self.renderer, root, targets, ctx, self.console)

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the project directory tree."""

        async def _mkdir(d: str) -> None:
            p = root / d
            await asyncio.to_thread(p.mkdir, parents=True, exist_ok=True)

        try:
            await asyncio.gather(*[_mkdir(d) for d in self.directories()])
        except OSError as exc:
            raise ScaffoldError("directories", f"failed to create directory structure: {exc}") from exc
