"""Exception definitions module."""

from multibuild.core.exceptions.errors import (
    ConfigurationError,
    DirectoryNotFoundError,
    MultiBuildError,
    UnsupportedProjectKindError,
)

__all__ = [
    "MultiBuildError",
    "ConfigurationError",
    "DirectoryNotFoundError",
    "UnsupportedProjectKindError",
]
