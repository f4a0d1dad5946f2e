"""Custom exception definitions for multibuild."""

from typing import Any


class MultiBuildError(Exception):
    """Base exception for all multibuild errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class DirectoryNotFoundError(MultiBuildError):
    """Raised when the root directory is missing or not a directory."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize directory error.

        Args:
            message: Error message.
            path: The offending path.
            details: Additional error details.
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class UnsupportedProjectKindError(MultiBuildError, ValueError):
    """Raised when a build command is requested for an unsupported project kind.

    This is a programming error: the detector only produces buildable kinds.
    """

    def __init__(self, kind: Any) -> None:
        super().__init__(
            f"Cannot build unsupported project type: {kind}",
            details={"kind": str(kind)},
        )


class ConfigurationError(MultiBuildError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
