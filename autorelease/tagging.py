"""Release tag creation.

A tag is created at most once: when the ref already exists locally or on
the remote, nothing is written and the result says so. Existing tags are
never moved, overwritten or deleted.
"""

from dataclasses import dataclass
from enum import Enum

from autorelease.config.models import PLACEHOLDER, ReleaseConfig
from autorelease.exceptions import TagError, TagExistsError
from autorelease.git.client import VersionControlClient


class TagStatus(Enum):
    CREATED = "created"
    EXISTS = "exists"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class TagResult:
    """Result of the tag step.

    Attributes:
        status: What happened
        tag_name: Resolved tag name
        message: Brief description
        error: TagExistsError for EXISTS, TagError for FAILED, else None
    """

    status: TagStatus
    tag_name: str
    message: str
    error: TagError | None = None

    @classmethod
    def created(cls, tag_name: str) -> "TagResult":
        return cls(TagStatus.CREATED, tag_name, f"Tag created: {tag_name}")

    @classmethod
    def exists(cls, tag_name: str) -> "TagResult":
        error = TagExistsError(
            f"Tag already exists: {tag_name}",
            fix_hint="Bump the version in package.json to release again",
        )
        return cls(TagStatus.EXISTS, tag_name, error.message, error)

    @classmethod
    def failed(cls, tag_name: str, error: TagError) -> "TagResult":
        return cls(TagStatus.FAILED, tag_name, "Failed to create a tag", error)

    @classmethod
    def skipped(cls, tag_name: str) -> "TagResult":
        return cls(TagStatus.SKIPPED, tag_name, f"Would create tag {tag_name} (dry run)")


def expand_template(template: str, version: str) -> str:
    """Replace every %s in template with version."""
    return template.replace(PLACEHOLDER, version)


def create_tag(
    config: ReleaseConfig,
    version: str,
    vcs: VersionControlClient,
    dry_run: bool = False,
) -> TagResult:
    """Create and push the annotated release tag for version.

    Args:
        config: Release configuration (templates, tagger, remote)
        version: Version substituted into the templates
        vcs: Version-control client
        dry_run: Stop after the existence check

    Returns:
        TagResult; git failures are reported as FAILED, never raised
    """
    tag_name = expand_template(config.tag_name, version)
    tag_message = expand_template(config.tag_message, version)

    try:
        if vcs.tag_exists(tag_name, config.remote):
            return TagResult.exists(tag_name)
    except TagError as e:
        return TagResult.failed(tag_name, e)

    if dry_run:
        return TagResult.skipped(tag_name)

    author = config.tag_author
    if not author.name or not author.email:
        return TagResult.failed(
            tag_name,
            TagError(
                "Tagger identity is incomplete",
                details=f"name={author.name!r}, email={author.email!r}",
                fix_hint="Set the git_user_name and git_user_email inputs",
            ),
        )

    try:
        vcs.set_identity(author.name, author.email)
        vcs.create_annotated_tag(tag_name, tag_message)
        vcs.push_tag(tag_name, config.remote)
    except TagError as e:
        return TagResult.failed(tag_name, e)

    return TagResult.created(tag_name)
