"""Logging system with Rich support."""

import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from multibuild.core.config.settings import LoggingSettings, get_settings

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
EXECUTION_LOG_TIMESTAMP = "%Y_%m_%d_%H_%M"

# Global console instance
_console: Console | None = None
_loggers: dict[str, logging.Logger] = {}


def execution_log_filename(app_prefix: str | None, timestamp: datetime) -> str:
    """Build the file name of the per-run execution log.

    Args:
        app_prefix: Optional application prefix. Blank values are ignored.
        timestamp: Start time of the run.

    Returns:
        File name such as ``billing_multiple_build_execution_2024_05_01_13_45.log``.
    """
    stamp = timestamp.strftime(EXECUTION_LOG_TIMESTAMP)
    if app_prefix and app_prefix.strip():
        return f"{app_prefix.strip()}_multiple_build_execution_{stamp}.log"
    return f"multiple_build_execution_{stamp}.log"


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    return handler


def setup_logging(
    settings: LoggingSettings | None = None,
    execution_log: Path | None = None,
) -> None:
    """Setup logging configuration.

    Args:
        settings: Logging settings. Uses global settings if not provided.
        execution_log: Optional transcript file that records everything,
            build tool output included, at DEBUG level.
    """
    global _console

    if settings is None:
        settings = get_settings().logging

    console_level = getattr(logging, settings.level)

    # Create console if using Rich
    if settings.use_rich:
        _console = Console(stderr=True)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if execution_log else console_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Add Rich handler or standard handler
    handler: RichHandler | logging.StreamHandler
    if settings.use_rich:
        handler = RichHandler(
            console=_console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.format))
    handler.setLevel(console_level)
    root_logger.addHandler(handler)

    # Add file handler if specified
    if settings.file:
        root_logger.addHandler(_file_handler(settings.file, console_level))

    if execution_log:
        root_logger.addHandler(_file_handler(execution_log, logging.DEBUG))


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    if name not in _loggers:
        logger = logging.getLogger(name)
        _loggers[name] = logger

        # Defaults only; config files are read once the CLI has started
        if not logging.getLogger().handlers:
            setup_logging(LoggingSettings())

    return _loggers[name]


def get_console() -> Console:
    """Get the global Rich console instance.

    Returns:
        Console instance.
    """
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console
