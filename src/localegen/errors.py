"""Exceptions raised while compiling resource catalogs.

Lookup misses and substitution failures in the generated accessor are not
errors; they never leave the accessor. Everything here aborts a compilation
run before any artifact is written.
"""

from pathlib import Path

__all__ = [
    "CatalogParseError",
    "ConfigError",
    "LocalegenError",
    "MissingDefaultCatalogError",
]


class LocalegenError(Exception):
    """Base class for all compiler failures."""


class CatalogParseError(LocalegenError):
    """Raised when an existing catalog file cannot be read or parsed.

    Attributes:
        path: The offending catalog file
        cause: The underlying exception (I/O or XML syntax error)
    """

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Failed to parse {path}: {cause}")
        self.path = path
        self.cause = cause


class MissingDefaultCatalogError(LocalegenError):
    """Raised when the default locale has no catalog file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Default locale catalog does not exist: {path}")
        self.path = path


class ConfigError(LocalegenError):
    """Raised for configuration values the compiler cannot use."""
