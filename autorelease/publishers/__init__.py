"""Package registry publishing."""

from autorelease.publishers.base import (
    PackageRegistryClient,
    PublishContext,
    PublishResult,
    PublishStatus,
)
from autorelease.publishers.npm import NPMClient, NPMPublisher

__all__ = [
    "NPMClient",
    "NPMPublisher",
    "PackageRegistryClient",
    "PublishContext",
    "PublishResult",
    "PublishStatus",
]
