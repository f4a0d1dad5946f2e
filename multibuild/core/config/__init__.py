"""Configuration management for multibuild."""

from multibuild.core.config.loader import ConfigLoader
from multibuild.core.config.settings import (
    BuildSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "Settings",
    "LoggingSettings",
    "BuildSettings",
    "get_settings",
]
