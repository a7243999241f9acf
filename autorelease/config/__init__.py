"""Configuration management for autorelease."""

from autorelease.config.loader import build_config, load_file_config
from autorelease.config.models import (
    ActionInputs,
    FileConfig,
    ReleaseConfig,
    TagAuthor,
)

__all__ = [
    "ActionInputs",
    "FileConfig",
    "ReleaseConfig",
    "TagAuthor",
    "build_config",
    "load_file_config",
]
