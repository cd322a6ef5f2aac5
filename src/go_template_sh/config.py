"""go-template-sh project options.

Centralised, typed description of everything a user can choose for the
generated service. All options use Pydantic v2 models so they are validated
at construction time and can be serialised to/from JSON without
boiler-plate.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ConfigFormat(str, Enum):
    """On-disk representation of the generated service's runtime configuration.

    ``ENV`` is a flat struct filled from environment variables; the other
    three are nested documents decoded into a struct hierarchy.
    """
    ENV = "env"
    YAML = "yaml"
    JSON = "json"
    TOML = "toml"

    @classmethod
    def parse(cls, value: ConfigFormat | str | None) -> ConfigFormat:
        """Coerce user input to a ``ConfigFormat``.

        Empty, blank or ``None`` means ``ENV``.  Anything else that is not a
        format name raises ``ValueError``.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if not text:
            return cls.ENV
        return cls(text)

    @property
    def structured(self) -> bool:
        return self is not ConfigFormat.ENV


class Framework(str, Enum):
    """HTTP framework used by the generated server."""
    STDLIB = "stdlib"
    CHI = "chi"
    GIN = "gin"
    ECHO = "echo"
    FIBER = "fiber"


class Logger(str, Enum):
    """Structured logger used by the generated service."""
    SLOG = "slog"
    ZAP = "zap"
    ZEROLOG = "zerolog"


class Database(str, Enum):
    """Backing services that can be wired into the generated service."""
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"


class CIProvider(str, Enum):
    """CI/CD pipeline flavour. ``NONE`` skips CI files entirely."""
    NONE = ""
    GITHUB = "github"
    GITLAB = "gitlab"


SUPPORTED_GO_VERSIONS: tuple[str, ...] = ("1.21", "1.22", "1.23", "1.24")

_PROJECT_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")
_MODULE_PATH_RE = re.compile(r"^[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+(/[A-Za-z0-9._~-]+)+$")


def _choices(enum_cls: type[Enum]) -> str:
    return ", ".join(repr(m.value) for m in enum_cls if m.value)


def _coerce_enum(enum_cls: type[Enum], value: Any, default: Enum, label: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"{label} must be one of {_choices(enum_cls)}, got {value!r}") from None


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------

class ProjectConfig(BaseModel):
    """Options for one generation run.

    Instances are created once by the CLI (or by tests) and handed to
    ``ProjectGenerator``; nothing mutates them afterwards.
    """

    project_name: str = Field(..., description="Directory and binary name of the generated service")
    module_path: Optional[str] = Field(
        default=None, description="Go module path; defaults to github.com/user/<project_name>"
    )
    go_version: str = Field(default="1.23", description="Go toolchain version for go.mod and images")
    framework: Framework = Field(default=Framework.STDLIB)
    logger: Logger = Field(default=Logger.SLOG)
    databases: list[Database] = Field(default_factory=list)
    enable_tracing: bool = Field(default=True, description="Wire OpenTelemetry tracing")
    enable_metrics: bool = Field(default=True, description="Expose Prometheus metrics")
    include_docker: bool = Field(default=True, description="Generate Dockerfile and docker-compose.yml")
    ci: CIProvider = Field(default=CIProvider.NONE)
    config_format: ConfigFormat = Field(default=ConfigFormat.ENV)
    env_sample: bool = Field(default=True, description="Generate a documented .env.example")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        if not value:
            raise ValueError("project name is required")
        if not _PROJECT_NAME_RE.match(value):
            raise ValueError(
                "project name must start with lowercase letter and contain only "
                "lowercase letters, numbers, hyphens, and underscores"
            )
        return value

    @field_validator("module_path")
    @classmethod
    def _check_module_path(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not value.strip():
            raise ValueError("module path is required")
        if not _MODULE_PATH_RE.match(value.strip()):
            raise ValueError(
                f"module path must be a valid Go module path (e.g. github.com/user/project), got {value!r}"
            )
        return value.strip()

    @field_validator("go_version")
    @classmethod
    def _check_go_version(cls, value: str) -> str:
        if not value:
            raise ValueError("Go version is required")
        if value not in SUPPORTED_GO_VERSIONS:
            raise ValueError(f"Go version must be one of {', '.join(SUPPORTED_GO_VERSIONS)}, got {value!r}")
        return value

    @field_validator("framework", mode="before")
    @classmethod
    def _coerce_framework(cls, value: Any) -> Any:
        return _coerce_enum(Framework, value, Framework.STDLIB, "framework")

    @field_validator("logger", mode="before")
    @classmethod
    def _coerce_logger(cls, value: Any) -> Any:
        return _coerce_enum(Logger, value, Logger.SLOG, "logger")

    @field_validator("ci", mode="before")
    @classmethod
    def _coerce_ci(cls, value: Any) -> Any:
        return _coerce_enum(CIProvider, value, CIProvider.NONE, "CI")

    @field_validator("config_format", mode="before")
    @classmethod
    def _coerce_config_format(cls, value: Any) -> Any:
        try:
            return ConfigFormat.parse(value)
        except ValueError:
            raise ValueError(
                f"config format must be one of {_choices(ConfigFormat)}, got {value!r}"
            ) from None

    @field_validator("databases", mode="before")
    @classmethod
    def _coerce_databases(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, Database)):
            value = [value]
        result: list[Database] = []
        for item in value:
            if item is None or item == "":
                continue
            try:
                db = item if isinstance(item, Database) else Database(str(item).strip().lower())
            except ValueError:
                raise ValueError(
                    f"database must be one of {_choices(Database)}, got {item!r}"
                ) from None
            if db not in result:
                result.append(db)
        return result

    @model_validator(mode="after")
    def _default_module_path(self) -> ProjectConfig:
        if self.module_path is None:
            self.module_path = f"github.com/user/{self.project_name}"
        return self

    # ------------------------------------------------------------------
    # Derived predicates
    # ------------------------------------------------------------------

    def has_database(self, name: Database | str) -> bool:
        """Return ``True`` if *name* is among the selected databases."""
        try:
            db = Database(name)
        except ValueError:
            return False
        return db in self.databases

    @property
    def needs_cache(self) -> bool:
        return self.has_database(Database.REDIS)

    @property
    def needs_sql(self) -> bool:
        return self.has_database(Database.POSTGRES) or self.has_database(Database.MYSQL)

    @property
    def needs_nosql(self) -> bool:
        return self.has_database(Database.MONGODB)

    @property
    def needs_database(self) -> bool:
        """SQL or document database selected (Redis alone does not count)."""
        return self.needs_sql or self.needs_nosql

    @property
    def structured_config(self) -> bool:
        return self.config_format.structured

    def project_dir(self, output_dir: str | Path) -> Path:
        """Root directory of the generated project under *output_dir*."""
        return Path(output_dir) / self.project_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Persist the options to a JSON answers file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path that was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: str | Path) -> ProjectConfig:
        """Load options previously written by :meth:`save`."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
