"""Read-only git queries.

All functions use autorelease.utils.shell.run() for command execution and
raise TagError on failures.
"""

from pathlib import Path

from autorelease.exceptions import TagError
from autorelease.utils.shell import ShellError, run


def tag_ref(tag: str) -> str:
    return f"refs/tags/{tag}"


def local_tag_exists(tag: str, cwd: Path | None = None) -> bool:
    """Check whether refs/tags/<tag> exists in the local repository.

    `git rev-parse -q --verify` exits 1 without output for a missing ref.

    Raises:
        TagError: If git cannot be run at all
    """
    try:
        result = run(
            ["git", "rev-parse", "-q", "--verify", tag_ref(tag)],
            cwd=cwd,
            check=False,
        )
    except ShellError as e:
        raise TagError(
            f"Failed to check if tag '{tag}' exists",
            details=str(e),
            fix_hint="Ensure git is installed and the workspace is a repository",
        ) from e
    return result.returncode == 0


def remote_tag_exists(
    tag: str, remote: str = "origin", cwd: Path | None = None
) -> bool:
    """Check whether refs/tags/<tag> exists on a remote without fetching.

    Raises:
        TagError: If the remote cannot be queried
    """
    try:
        result = run(
            ["git", "ls-remote", "--tags", remote, tag_ref(tag)],
            cwd=cwd,
            check=True,
        )
    except ShellError as e:
        raise TagError(
            f"Failed to list tags on remote '{remote}'",
            details=str(e),
            fix_hint=f"Ensure remote '{remote}' exists and is reachable",
        ) from e

    # Output format: <sha>\trefs/tags/<tag>
    refs = {line.split()[-1] for line in result.stdout.splitlines() if line.strip()}
    return tag_ref(tag) in refs
