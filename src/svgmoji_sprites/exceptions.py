"""Custom exception hierarchy for the svgmoji sprite builder.

This module defines domain-specific exceptions so that configuration,
catalog and sprite failures can be told apart by callers and surfaced
as a single terminal error from a build run.

Exception Hierarchy:
    SvgmojiError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   ├── ConfigFileNotFoundError
    │   └── UnknownLibraryError
    ├── CatalogError
    │   ├── CatalogLoadError
    │   └── CatalogFetchError
    └── SpriteError
        ├── SpriteSourceError
        ├── SpriteCompilationError
        └── SpriteWriteError
"""

from typing import Any


# Base Exception
class SvgmojiError(Exception):
    """Base exception for all sprite builder errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SvgmojiError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid configuration file",
            {"path": "svgmoji.yaml", "error": "libraries.0.name: field required"}
        )
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly requested configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/etc/svgmoji/svgmoji.yaml"}
        )
    """
    pass


class UnknownLibraryError(ConfigurationError):
    """Raised when the selected library is not part of the configuration.

    Example:
        raise UnknownLibraryError(
            "Unknown emoji library: fluent",
            {"library": "fluent", "available": ["blob", "noto", "openmoji", "twemoji"]}
        )
    """
    pass


# Catalog Exceptions
class CatalogError(SvgmojiError):
    """Base exception for emoji catalog and taxonomy errors."""
    pass


class CatalogLoadError(CatalogError):
    """Raised when a local catalog or taxonomy file cannot be parsed.

    Example:
        raise CatalogLoadError(
            "Invalid emoji data file",
            {"path": "data/en/data.json", "error": "Expecting value"}
        )
    """
    pass


class CatalogFetchError(CatalogError):
    """Raised when emoji data cannot be downloaded from the CDN.

    Example:
        raise CatalogFetchError(
            "Failed to fetch emoji data",
            {"url": "https://cdn.jsdelivr.net/npm/emojibase-data@latest/en/data.json",
             "status_code": 404}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize fetch exception with the HTTP status if one was received.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
            status_code: HTTP status code if applicable
        """
        super().__init__(message, details)
        self.status_code = status_code


# Sprite Exceptions
class SpriteError(SvgmojiError):
    """Base exception for sprite compilation and output errors."""
    pass


class SpriteSourceError(SpriteError):
    """Raised when a source folder or source shape cannot be read.

    Example:
        raise SpriteSourceError(
            "Failed to read sprite sources",
            {"folder": "packages/svgmoji__noto/svg", "error": "No such file or directory"}
        )
    """
    pass


class SpriteCompilationError(SpriteError):
    """Raised when the sprite compiler reports an error.

    Example:
        raise SpriteCompilationError(
            "Sprite compilation failed",
            {"sprite": "twemoji/group/animals-nature", "error": "mismatched tag"}
        )
    """
    pass


class SpriteWriteError(SpriteError):
    """Raised when a sprite destination cannot be created or written.

    Example:
        raise SpriteWriteError(
            "Failed to write sprite file",
            {"path": "packages/svgmoji__noto/sprites/all.svg", "error": "Permission denied"}
        )
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SvgmojiError, cause: BaseException) -> SvgmojiError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            path.write_bytes(contents)
        except OSError as e:
            raise chain_exception(
                SpriteWriteError("Failed to write sprite file", {"path": str(path)}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
