"""Main CLI entry point for multibuild."""

import logging
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from multibuild import __version__
from multibuild.builder import (
    BuildOrchestrator,
    ExitStatus,
    LoggerSink,
    ProjectDetector,
)
from multibuild.cli.display import (
    show_banner,
    show_build_summary,
    show_error,
    show_info,
)
from multibuild.core.config.settings import Settings
from multibuild.core.exceptions.errors import ConfigurationError, MultiBuildError
from multibuild.core.logger.logger import execution_log_filename, get_logger, setup_logging

logger = get_logger(__name__)

SEPARATOR_LINE = "=" * 80


def load_settings(config_path: Path | None) -> Settings:
    """Load settings, converting validation problems to ConfigurationError.

    Args:
        config_path: Optional YAML settings file.

    Returns:
        Loaded settings.
    """
    try:
        return Settings.load(config_path)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            config_key=str(config_path) if config_path else None,
            details={"error": str(e)},
        ) from e


def build_orchestrator(settings: Settings) -> BuildOrchestrator:
    """Create an orchestrator configured from settings.

    Args:
        settings: Application settings.

    Returns:
        BuildOrchestrator for the host platform.
    """
    output_level = getattr(logging, settings.build.output_level)
    return BuildOrchestrator(
        detector=ProjectDetector(sort_entries=settings.build.sort_projects),
        sink=LoggerSink(get_logger("multibuild.build_output"), level=output_level),
    )


@click.command()
@click.option(
    "--path",
    "-p",
    "root_path",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Root directory containing the projects to build",
)
@click.option("--app", "-a", "app_prefix", help="Application prefix for the log file name")
@click.option(
    "--log-path",
    "-l",
    type=click.Path(exists=True, file_okay=False, writable=True, path_type=Path),
    help="Directory where the execution log is saved (default: root directory)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file",
)
@click.version_option(__version__, "--version", "-v", message="multibuild version %(version)s")
def main(
    root_path: Path,
    app_prefix: str | None,
    log_path: Path | None,
    config_path: Path | None,
) -> None:
    """Build every Maven and Gradle project found under a directory.

    Each immediate subdirectory holding a pom.xml, build.gradle or
    build.gradle.kts is built with its wrapper script when present,
    otherwise with the globally installed tool.

    Exit status: 0 all builds succeeded, 1 at least one build failed,
    2 usage error, 3 no projects found, 130 interrupted.

    Example:
        multibuild --path ~/workspace --app nightly
    """
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        show_error("Configuration Error", str(e))
        raise SystemExit(int(ExitStatus.USAGE_ERROR))

    started_at = datetime.now()
    log_dir = log_path or root_path
    execution_log = log_dir / execution_log_filename(app_prefix, started_at)
    try:
        setup_logging(settings.logging, execution_log=execution_log)
    except OSError as e:
        show_error("Log File Error", str(e))
        raise SystemExit(int(ExitStatus.USAGE_ERROR))

    show_banner()

    logger.info(SEPARATOR_LINE)
    logger.info("Multiple build run started")
    logger.info(SEPARATOR_LINE)
    logger.info(f"Root Path: {root_path.absolute()}")
    if app_prefix and app_prefix.strip():
        logger.info(f"App Prefix: {app_prefix.strip()}")

    try:
        report, status = build_orchestrator(settings).run(root_path)

        logger.info(
            f"Build run finished: {report.success_count} succeeded, "
            f"{report.failure_count} failed ({status.name})"
        )

        show_build_summary(report)
    except MultiBuildError as e:
        show_error("Error", str(e))
        raise SystemExit(int(ExitStatus.USAGE_ERROR))
    except KeyboardInterrupt:
        logger.warning("Build run interrupted")
        show_info("Interrupted", "Operation cancelled by user.")
        raise SystemExit(int(ExitStatus.INTERRUPTED))

    show_info("Execution Log", str(execution_log.absolute()))

    raise SystemExit(int(status))


if __name__ == "__main__":
    main()
