"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from multibuild.core.config.loader import ConfigLoader

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Searched in order when no explicit config file is given
DEFAULT_CONFIG_PATHS = [
    Path("multibuild.yaml"),
    Path.home() / ".multibuild" / "config.yaml",
]


def _validate_level(v: str) -> str:
    v_upper = str(v).upper()
    if v_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
    return v_upper


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIBUILD_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Additional log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        return _validate_level(v)

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class BuildSettings(BaseSettings):
    """Build orchestration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIBUILD_BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sort_projects: bool = Field(
        default=True,
        description="Build projects in name order instead of filesystem listing order",
    )
    output_level: str = Field(
        default="DEBUG",
        description="Log level used for lines printed by the build tools",
    )

    @field_validator("output_level", mode="before")
    @classmethod
    def validate_output_level(cls, v: str) -> str:
        """Validate build output log level."""
        return _validate_level(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            logging=LoggingSettings(**loader.get_section("logging")),
            build=BuildSettings(**loader.get_section("build")),
        )

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from an explicit file or the default locations.

        Priority: Environment variables > .env > YAML file > defaults

        Args:
            config_path: Explicit YAML file. Must exist when given.

        Returns:
            Settings instance.
        """
        if config_path is not None:
            return cls.from_yaml(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return cls.from_yaml(default_path)

        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
