"""Tests for release commit detection."""

import re
from itertools import permutations

import pytest

from autorelease.commits import compile_pattern, extract_version, matches
from autorelease.event import CommitRecord
from autorelease.exceptions import ConfigurationError

PATTERN = r"^release: (.+)$"


def commits(*messages: str) -> list[CommitRecord]:
    return [CommitRecord(message=m) for m in messages]


class TestMatches:
    """Tests for matches()."""

    def test_release_commit_is_found(self) -> None:
        assert matches(PATTERN, "2.0.0", commits("fix bug", "release: 2.0.0")) is True

    def test_no_release_commit(self) -> None:
        assert matches(PATTERN, "2.0.0", commits("fix bug", "chore: update deps")) is False

    def test_empty_commit_list(self) -> None:
        assert matches(PATTERN, "2.0.0", []) is False

    def test_captured_version_must_equal_manifest_version(self) -> None:
        """A release commit for another version does not count."""
        assert matches(PATTERN, "2.0.0", commits("release: 2.0.1")) is False

    def test_comparison_is_exact(self) -> None:
        """No trimming and no case folding on the captured text."""
        assert matches(r"^release: (.+)$", "2.0.0", commits("release: 2.0.0 ")) is False
        assert matches(r"^Release (\S+)", "v1.0.0-RC", commits("Release v1.0.0-rc")) is False

    def test_pattern_is_searched_not_anchored(self) -> None:
        """Unanchored patterns match anywhere in the message."""
        assert matches(r"bump to (\S+)", "1.2.3", commits("chore: bump to 1.2.3")) is True

    def test_only_first_group_is_compared(self) -> None:
        pattern = r"^(\S+) \((\w+)\)$"
        assert matches(pattern, "1.2.3", commits("1.2.3 (stable)")) is True
        assert matches(pattern, "stable", commits("1.2.3 (stable)")) is False

    def test_multiline_message_uses_search_semantics(self) -> None:
        """Without re.M, ^ and $ anchor the whole message."""
        message = "release: 3.0.0\n\nCo-authored-by: someone"
        assert matches(PATTERN, "3.0.0", commits(message)) is False
        assert matches(r"(?m)^release: (.+)$", "3.0.0", commits(message)) is True

    def test_dollar_matches_before_trailing_newline(self) -> None:
        """Python's $ also matches just before a final newline; \\Z does not."""
        message = "release: 2.0.0\n"
        assert matches(PATTERN, "2.0.0", commits(message)) is True
        assert matches(r"^release: (.+)\Z", "2.0.0", commits(message)) is False

    def test_named_group_uses_python_syntax(self) -> None:
        assert matches(r"^release: (?P<v>\S+)$", "2.0.0", commits("release: 2.0.0")) is True

    def test_result_is_order_independent(self) -> None:
        messages = ("fix bug", "release: 2.0.0", "docs: readme")
        results = {
            matches(PATTERN, "2.0.0", commits(*order)) for order in permutations(messages)
        }
        assert results == {True}

    def test_stops_at_first_match(self) -> None:
        """Iteration stops once the release commit is found."""
        seen: list[str] = []

        def tracked():
            for message in ("release: 2.0.0", "fix bug"):
                seen.append(message)
                yield CommitRecord(message=message)

        assert matches(PATTERN, "2.0.0", tracked()) is True
        assert seen == ["release: 2.0.0"]

    def test_accepts_compiled_pattern(self) -> None:
        assert matches(re.compile(PATTERN), "2.0.0", commits("release: 2.0.0")) is True

    def test_pattern_without_group_is_rejected(self) -> None:
        """A pattern that cannot capture a version is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            matches(r"^release: .+$", "2.0.0", commits("release: 2.0.0"))
        assert "no capture group" in str(exc_info.value)
        assert exc_info.value.exit_code == 2

    def test_invalid_pattern_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            matches(r"^release: (.+$", "2.0.0", [])
        assert "Invalid commit_message_pattern" in str(exc_info.value)

    def test_logs_each_checked_commit(self, capsys: pytest.CaptureFixture[str]) -> None:
        matches(PATTERN, "2.0.0", commits("fix bug", "release: 2.0.0"))

        out = capsys.readouterr().out
        assert "Looking for '2.0.0'" in out
        assert "Checking commit: fix bug" in out
        assert "Match!" in out


class TestHelpers:
    def test_extract_version(self) -> None:
        compiled = compile_pattern(PATTERN)
        assert extract_version(compiled, "release: 1.0.0") == "1.0.0"
        assert extract_version(compiled, "fix bug") is None

    def test_optional_group_that_did_not_participate(self) -> None:
        """An unmatched optional group never equals a version."""
        compiled = compile_pattern(r"^release(?:: (.+))?$")
        assert extract_version(compiled, "release") is None
        assert matches(compiled, "1.0.0", commits("release")) is False
