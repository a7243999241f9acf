"""Publish results, context and the package-registry capability."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class PublishStatus(Enum):
    """Status of a publish operation."""

    SUCCESS = "success"
    SKIPPED = "skipped"


@dataclass
class PublishResult:
    """Result of a publish operation.

    Failures are not results: they raise RegistryError and end the run.

    Attributes:
        status: Overall status
        message: Brief description
        registry_url: Registry the package was sent to
        package_url: Direct URL to the published package
        version: Version that was published
    """

    status: PublishStatus
    message: str
    registry_url: str | None = None
    package_url: str | None = None
    version: str | None = None

    @classmethod
    def success(
        cls,
        message: str,
        registry_url: str | None = None,
        package_url: str | None = None,
        version: str | None = None,
    ) -> "PublishResult":
        return cls(
            status=PublishStatus.SUCCESS,
            message=message,
            registry_url=registry_url,
            package_url=package_url,
            version=version,
        )

    @classmethod
    def skipped(cls, message: str, version: str | None = None) -> "PublishResult":
        return cls(status=PublishStatus.SKIPPED, message=message, version=version)


@dataclass
class PublishContext:
    """Everything a publisher needs for one publish."""

    workspace: Path
    version: str
    token: str
    registry: str
    access: str = "public"
    package_name: str | None = None
    dry_run: bool = False


class PackageRegistryClient(ABC):
    """The package-manager commands the publish step needs.

    Implementations raise RegistryError when a command fails.
    """

    @abstractmethod
    def write_credentials(self, registry: str, token: str) -> Path:
        """Store the auth token for registry; return the file written."""

    @abstractmethod
    def set_registry(self, url: str) -> None:
        pass

    @abstractmethod
    def publish(self, access: str) -> str:
        """Publish the package in the workspace; return the tool's output."""
