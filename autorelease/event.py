"""Push event payload models.

Only the fields autorelease uses are modelled; everything else GitHub sends
is ignored.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from autorelease.exceptions import ConfigurationError


class CommitRecord(BaseModel):
    """One commit of the push, in the order the event lists them."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str


class RepositoryOwner(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    email: str | None = None
    login: str | None = None


class Repository(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    owner: RepositoryOwner = Field(default_factory=RepositoryOwner)


class PushEvent(BaseModel):
    """The push event that triggered the job."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    repository: Repository = Field(default_factory=Repository)
    commits: list[CommitRecord] = Field(default_factory=list)


def load_event(path: Path) -> PushEvent:
    """Read the event payload GitHub writes to $GITHUB_EVENT_PATH.

    Raises:
        ConfigurationError: If the file cannot be read as a push payload
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Event payload not found: {path}",
            fix_hint="Run inside a GitHub Actions push job or pass --event-path",
        ) from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in event payload {path}",
            details=str(e),
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"Event payload {path} is not valid UTF-8",
            details=str(e),
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read event payload {path}",
            details=str(e),
        ) from e

    try:
        return PushEvent.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Unexpected event payload in {path}",
            details=str(e),
            fix_hint="autorelease must be triggered by a push event",
        ) from e
