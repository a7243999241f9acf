"""Release commit detection."""

import re
from collections.abc import Iterable

from autorelease import actions
from autorelease.event import CommitRecord
from autorelease.exceptions import ConfigurationError


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a commit message pattern.

    Args:
        pattern: Regex source or an already compiled pattern

    Returns:
        Compiled pattern with at least one capture group

    Raises:
        ConfigurationError: If the pattern is invalid or has no capture group
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(
                f"Invalid commit_message_pattern: {pattern}",
                details=str(e),
            ) from e

    if compiled.groups < 1:
        raise ConfigurationError(
            f"commit_message_pattern has no capture group: {compiled.pattern}",
            fix_hint="Wrap the version part in parentheses, e.g. '^release: (.+)$'",
        )
    return compiled


def extract_version(pattern: re.Pattern[str], message: str) -> str | None:
    """Return the first capture group of pattern in message, if any."""
    match = pattern.search(message)
    if match is None:
        return None
    return match.group(1)


def matches(
    pattern: str | re.Pattern[str],
    version: str,
    commits: Iterable[CommitRecord],
) -> bool:
    """Check whether any commit is the release commit for version.

    Commits are checked in the order given and the scan stops at the first
    hit. The captured text must equal version exactly.

    Raises:
        ConfigurationError: If the pattern is invalid or has no capture group
    """
    compiled = compile_pattern(pattern)
    actions.info(f"Looking for '{version}' using pattern {compiled.pattern}")

    for commit in commits:
        actions.info(f"Checking commit: {commit.message}")
        if extract_version(compiled, commit.message) == version:
            actions.info("Match!")
            return True
    return False
