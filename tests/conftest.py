"""Pytest fixtures for autorelease tests.

Provides common fixtures for:
- Temporary workspaces with package.json
- Push event payloads
- In-memory npm and git clients
- A real git repository with a bare remote
"""

import json
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from autorelease.exceptions import RegistryError, TagError
from autorelease.git.client import VersionControlClient
from autorelease.publishers.base import PackageRegistryClient


class FakeRegistryClient(PackageRegistryClient):
    """Records npm calls instead of running them."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.fail_on = fail_on

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if call[0] == self.fail_on:
            raise RegistryError(
                f"npm command failed: npm {call[0]}",
                details="Exit code: 1\nnpm ERR! 403 cannot publish over existing version",
            )

    def write_credentials(self, registry: str, token: str) -> Path:
        self._record("write_credentials", registry, token)
        return Path(".npmrc")

    def set_registry(self, url: str) -> None:
        self._record("set_registry", url)

    def publish(self, access: str) -> str:
        self._record("publish", access)
        return "+ test-package@2.0.0"


class FakeGitClient(VersionControlClient):
    """Records git calls against an in-memory set of tags."""

    def __init__(
        self,
        existing_tags: set[str] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.tags = set(existing_tags or ())
        self.calls: list[tuple[str, ...]] = []
        self.fail_on = fail_on

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if call[0] == self.fail_on:
            raise TagError(f"git {call[0]} failed", details="fatal: simulated")

    def tag_exists(self, tag: str, remote: str) -> bool:
        self._record("tag_exists", tag, remote)
        return tag in self.tags

    def set_identity(self, name: str, email: str) -> None:
        self._record("set_identity", name, email)

    def create_annotated_tag(self, name: str, message: str) -> None:
        self._record("create_annotated_tag", name, message)
        self.tags.add(name)

    def push_tag(self, name: str, remote: str) -> None:
        self._record("push_tag", name, remote)

    @property
    def commands(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove action inputs and runner variables leaking from the host."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in (
            "GITHUB_OUTPUT",
            "GITHUB_WORKSPACE",
            "GITHUB_EVENT_PATH",
        ):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty workspace directory.

    Returns:
        Path to workspace
    """
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws


@pytest.fixture
def write_package_json(workspace: Path) -> Callable[..., Path]:
    """Return a helper that writes package.json into the workspace."""

    def _write(**fields: Any) -> Path:
        data = {"name": "test-package", "description": "Test package", **fields}
        path = workspace / "package.json"
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def push_payload() -> Callable[..., dict[str, Any]]:
    """Return a builder for push event payloads."""

    def _payload(*messages: str, **owner: Any) -> dict[str, Any]:
        owner_data = {
            "name": "octo-org",
            "email": "octo@example.com",
            "login": "octo-org",
            **owner,
        }
        return {
            "ref": "refs/heads/main",
            "repository": {"full_name": "octo-org/test-package", "owner": owner_data},
            "commits": [
                {"id": f"{i:040x}", "message": message, "distinct": True}
                for i, message in enumerate(messages)
            ],
        }

    return _payload


@pytest.fixture
def event_file(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes an event payload file."""

    def _write(payload: dict[str, Any]) -> Path:
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload))
        return path

    return _write


@pytest.fixture
def registry() -> FakeRegistryClient:
    return FakeRegistryClient()


@pytest.fixture
def vcs() -> FakeGitClient:
    return FakeGitClient()


@pytest.fixture
def fake_clients() -> tuple[type[FakeRegistryClient], type[FakeGitClient]]:
    """Expose the fake client classes for tests needing custom instances."""
    return FakeRegistryClient, FakeGitClient


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with one commit and a bare 'origin' remote.

    Returns:
        Path to the working tree
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    remote = tmp_path / "origin.git"
    _git("init", "--bare", str(remote), cwd=tmp_path)

    repo = tmp_path / "repo"
    repo.mkdir()
    _git("init", cwd=repo)
    _git("config", "user.email", "test@test.com", cwd=repo)
    _git("config", "user.name", "Test User", cwd=repo)
    (repo / "package.json").write_text(
        json.dumps({"name": "test-package", "version": "1.0.0"})
    )
    _git("add", ".", cwd=repo)
    _git("commit", "-m", "Initial commit", cwd=repo)
    _git("remote", "add", "origin", str(remote), cwd=repo)
    return repo
