"""Tests for push event payload loading."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from autorelease.event import PushEvent, load_event
from autorelease.exceptions import ConfigurationError


class TestLoadEvent:
    def test_loads_owner_and_commits_in_order(
        self,
        event_file: Callable[[dict[str, Any]], Path],
        push_payload: Callable[..., dict[str, Any]],
    ) -> None:
        path = event_file(push_payload("first", "second", "third"))

        event = load_event(path)

        assert [c.message for c in event.commits] == ["first", "second", "third"]
        assert event.repository.owner.name == "octo-org"
        assert event.repository.owner.email == "octo@example.com"

    def test_missing_sections_default_to_empty(
        self, event_file: Callable[[dict[str, Any]], Path]
    ) -> None:
        """A payload without commits (e.g. a tag push) is not an error."""
        event = load_event(event_file({"ref": "refs/tags/v1.0.0"}))

        assert event.commits == []
        assert event.repository.owner.name is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_event(tmp_path / "missing.json")
        assert "Event payload not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_event(path)
        assert "Invalid JSON" in str(exc_info.value)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_bytes(b"\xff{}")

        with pytest.raises(ConfigurationError) as exc_info:
            load_event(path)
        assert "not valid UTF-8" in str(exc_info.value)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """An event path pointing at a directory is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_event(tmp_path)
        assert "Cannot read event payload" in str(exc_info.value)

    def test_commit_without_message_is_rejected(
        self, event_file: Callable[[dict[str, Any]], Path]
    ) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_event(event_file({"commits": [{"id": "abc"}]}))
        assert "Unexpected event payload" in str(exc_info.value)

    def test_models_are_frozen(self) -> None:
        event = PushEvent.model_validate({"commits": [{"message": "x"}]})
        with pytest.raises(ValidationError):
            event.commits[0].message = "y"  # type: ignore[misc]
