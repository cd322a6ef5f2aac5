"""Command line front end for go-template-sh.

Usage::

    go-template-sh --name orders -f chi --database postgres,redis
    go-template-sh --from-file answers.json -o ./services --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

from pydantic import ValidationError

from go_template_sh import __version__
from go_template_sh.config import (
    SUPPORTED_GO_VERSIONS,
    CIProvider,
    ConfigFormat,
    Database,
    Framework,
    Logger,
    ProjectConfig,
)
from go_template_sh.scaffolder import ProjectGenerator, ScaffoldError
from go_template_sh.utils import (
    console,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go-template-sh",
        description="Generate a production-ready Go microservice",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  go-template-sh --name orders\n"
            "  go-template-sh -n orders -f gin -l zap --database postgres,redis --ci github\n"
            "  go-template-sh -n orders --config-format yaml --no-docker --dry-run\n"
            "  go-template-sh --from-file answers.json -o ./services\n"
        ),
    )

    parser.add_argument("--output", "-o", default=".", help="Parent directory of the project (default: .)")
    parser.add_argument("--name", "-n", default=None, help="Project name (required unless --from-file)")
    parser.add_argument("--module", "-m", default=None, help="Go module path (default: github.com/user/<name>)")
    parser.add_argument(
        "--go-version",
        default=None,
        help=f"Go version, one of {', '.join(SUPPORTED_GO_VERSIONS)} (default: 1.23)",
    )
    parser.add_argument(
        "--framework", "-f",
        default=None,
        help=f"HTTP framework: {_values(Framework)} (default: stdlib)",
    )
    parser.add_argument(
        "--database",
        action="append",
        default=None,
        help=f"Database to include: {_values(Database)}; repeatable or comma separated",
    )
    parser.add_argument(
        "--logger", "-l",
        default=None,
        help=f"Logger: {_values(Logger)} (default: slog)",
    )
    parser.add_argument(
        "--config-format",
        default=None,
        help=f"Runtime config format: {_values(ConfigFormat)} (default: env)",
    )
    parser.add_argument(
        "--ci",
        default=None,
        help=f"CI provider: {_values(CIProvider)} (default: none)",
    )
    parser.add_argument("--no-tracing", dest="enable_tracing", action="store_false", default=None,
                        help="Skip OpenTelemetry tracing")
    parser.add_argument("--no-metrics", dest="enable_metrics", action="store_false", default=None,
                        help="Skip Prometheus metrics")
    parser.add_argument("--no-docker", dest="include_docker", action="store_false", default=None,
                        help="Skip Dockerfile and docker-compose.yml")
    parser.add_argument("--no-env-sample", dest="env_sample", action="store_false", default=None,
                        help="Write a minimal .env.example")
    parser.add_argument("--from-file", default=None, help="Load options from a JSON answers file")
    parser.add_argument("--save-config", default=None, help="Write the effective options to a JSON file")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be generated without writing")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _values(enum_cls: type) -> str:
    return ", ".join(m.value for m in enum_cls if m.value)


def split_databases(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma separated ``--database`` values."""
    result: list[str] = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def config_from_args(args: argparse.Namespace) -> ProjectConfig:
    """Build the run's options: answers file first, explicit flags on top."""
    data: dict[str, Any] = {}
    if args.from_file:
        data = ProjectConfig.load(args.from_file).model_dump(mode="json")

    overrides = {
        "project_name": args.name,
        "module_path": args.module,
        "go_version": args.go_version,
        "framework": args.framework,
        "logger": args.logger,
        "config_format": args.config_format,
        "ci": args.ci,
        "enable_tracing": args.enable_tracing,
        "enable_metrics": args.enable_metrics,
        "include_docker": args.include_docker,
        "env_sample": args.env_sample,
    }
    if args.database is not None:
        overrides["databases"] = split_databases(args.database)
    # A new name without a new module path gets the default path for that name
    if args.name is not None and args.module is None:
        data.pop("module_path", None)

    data.update({key: value for key, value in overrides.items() if value is not None})
    return ProjectConfig(**data)


def summarize(config: ProjectConfig) -> dict[str, str]:
    return {
        "Project": config.project_name,
        "Module": config.module_path or "",
        "Go version": config.go_version,
        "Framework": config.framework.value,
        "Logger": config.logger.value,
        "Databases": ", ".join(db.value for db in config.databases) or "none",
        "Config format": config.config_format.value,
        "Tracing": "yes" if config.enable_tracing else "no",
        "Metrics": "yes" if config.enable_metrics else "no",
        "Docker": "yes" if config.include_docker else "no",
        "CI": config.ci.value or "none",
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``go-template-sh`` and ``python -m go_template_sh``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.name is None and not args.from_file:
        parser.error("--name is required unless --from-file is given")

    try:
        config = config_from_args(args)
    except ValidationError as exc:
        print_error("Invalid options:")
        for err in exc.errors():
            console.print(f"  - {err['msg']}")
        sys.exit(1)
    except OSError as exc:
        print_error(f"Cannot read answers file {args.from_file}: {exc}")
        sys.exit(1)

    print_summary_table(summarize(config), title=f"go-template-sh {__version__}")

    if args.save_config:
        try:
            saved = config.save(args.save_config)
        except OSError as exc:
            print_error(f"Cannot write answers file {args.save_config}: {exc}")
            sys.exit(1)
        print_success(f"Options saved to {saved}")

    generator = ProjectGenerator(config, console=console)

    if args.dry_run:
        files = [target.output for target in generator.plan()]
        print_file_tree(config.project_name, files, generator.directories())
        print_warning(f"Dry run: {len(files)} files would be written to {config.project_dir(args.output)}")
        return

    try:
        project_root = asyncio.run(generator.generate(args.output))
    except ScaffoldError as exc:
        print_error(f"Generation failed: {exc}")
        sys.exit(1)

    print_success(f"Project created at {project_root}")
    console.print("\nNext steps:")
    console.print(f"  cd {project_root}")
    console.print("  go mod tidy")
    console.print("  make run")


if __name__ == "__main__":
    main()
