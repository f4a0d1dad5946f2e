"""Logging helpers."""

from multibuild.core.logger.logger import (
    execution_log_filename,
    get_console,
    get_logger,
    setup_logging,
)

__all__ = ["setup_logging", "get_logger", "get_console", "execution_log_filename"]
