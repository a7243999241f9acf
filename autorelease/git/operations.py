"""Git operations that modify repository state.

All functions use autorelease.utils.shell.run() for command execution and
raise TagError on failures.
"""

from pathlib import Path

from autorelease.exceptions import TagError
from autorelease.git.queries import tag_ref
from autorelease.utils.shell import ShellError, run


def set_identity(name: str, email: str, cwd: Path | None = None) -> None:
    """Set user.name and user.email in the repository's local config.

    Raises:
        TagError: If git config fails
    """
    try:
        run(["git", "config", "--local", "user.name", name], cwd=cwd)
        run(["git", "config", "--local", "user.email", email], cwd=cwd)
    except ShellError as e:
        raise TagError(
            "Failed to configure git identity",
            details=str(e),
            fix_hint="Ensure the workspace is a git repository",
        ) from e


def tag(name: str, message: str, cwd: Path | None = None) -> None:
    """Create an annotated tag on HEAD.

    Raises:
        TagError: If tag creation fails
    """
    try:
        run(["git", "tag", "-a", "-m", message, name], cwd=cwd)
    except ShellError as e:
        raise TagError(
            f"Failed to create git tag '{name}'",
            details=str(e),
            fix_hint=f"Ensure tag '{name}' is a valid ref name",
        ) from e


def push_tag(tag: str, remote: str = "origin", cwd: Path | None = None) -> None:
    """Push a single tag ref to a remote. Never forces.

    Raises:
        TagError: If push fails
    """
    try:
        run(["git", "push", remote, tag_ref(tag)], cwd=cwd)
    except ShellError as e:
        raise TagError(
            f"Failed to push tag '{tag}' to remote '{remote}'",
            details=str(e),
            fix_hint="Ensure the job's token has contents: write permission",
        ) from e
