"""Utility modules for autorelease."""

from autorelease.utils.shell import (
    ShellError,
    is_command_available,
    run,
    strip_ansi,
)

__all__ = [
    "run",
    "strip_ansi",
    "is_command_available",
    "ShellError",
]
