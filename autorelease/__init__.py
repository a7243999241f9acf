"""Publish npm packages and tag releases from a CI push."""

__version__ = "0.1.0"

from autorelease.exceptions import (
    NEUTRAL_EXIT_CODE,
    ConfigurationError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    MissingVersionError,
    RegistryError,
    ReleaseError,
    TagError,
    TagExistsError,
)

__all__ = [
    "__version__",
    "NEUTRAL_EXIT_CODE",
    "ReleaseError",
    "ConfigurationError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "MissingVersionError",
    "RegistryError",
    "TagError",
    "TagExistsError",
]
