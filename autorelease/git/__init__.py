"""Git operations and the version-control client.

All operations use autorelease.utils.shell.run() for command execution and
raise TagError on failures.
"""

from autorelease.git.client import GitClient, VersionControlClient
from autorelease.git.operations import push_tag, set_identity, tag
from autorelease.git.queries import local_tag_exists, remote_tag_exists, tag_ref

__all__ = [
    "GitClient",
    "VersionControlClient",
    "local_tag_exists",
    "remote_tag_exists",
    "tag_ref",
    "set_identity",
    "tag",
    "push_tag",
]
