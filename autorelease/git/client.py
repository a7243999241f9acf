"""Version-control capability used by the tag step."""

from abc import ABC, abstractmethod
from pathlib import Path

from autorelease.git import operations, queries


class VersionControlClient(ABC):
    """The git commands the tag step needs, one method per command.

    Implementations raise TagError when a command fails.
    """

    @abstractmethod
    def tag_exists(self, tag: str, remote: str) -> bool:
        """Check the local repository, then the remote, for refs/tags/<tag>."""

    @abstractmethod
    def set_identity(self, name: str, email: str) -> None:
        pass

    @abstractmethod
    def create_annotated_tag(self, name: str, message: str) -> None:
        pass

    @abstractmethod
    def push_tag(self, name: str, remote: str) -> None:
        pass


class GitClient(VersionControlClient):
    """VersionControlClient backed by the git CLI in a working tree."""

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd

    def tag_exists(self, tag: str, remote: str) -> bool:
        if queries.local_tag_exists(tag, cwd=self.cwd):
            return True
        return queries.remote_tag_exists(tag, remote=remote, cwd=self.cwd)

    def set_identity(self, name: str, email: str) -> None:
        operations.set_identity(name, email, cwd=self.cwd)

    def create_annotated_tag(self, name: str, message: str) -> None:
        operations.tag(name, message, cwd=self.cwd)

    def push_tag(self, name: str, remote: str) -> None:
        operations.push_tag(name, remote=remote, cwd=self.cwd)
