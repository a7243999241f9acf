"""Pydantic v2 configuration models.

Three layers feed the release config:
- ActionInputs: the action's inputs, read from INPUT_* environment variables
- FileConfig: an optional YAML/TOML file committed to the repository
- ReleaseConfig: the immutable record a run works from
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from autorelease.commits import compile_pattern
from autorelease.exceptions import ConfigurationError

DEFAULT_REGISTRY = "registry.npmjs.org"
DEFAULT_TAG_TEMPLATE = "v%s"
PLACEHOLDER = "%s"


def _check_template(v: str) -> str:
    if PLACEHOLDER not in v:
        raise ValueError(f"template must contain '{PLACEHOLDER}'")
    return v


class TagAuthor(BaseModel):
    """Identity recorded as the tagger of the release tag."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="git user.name")
    email: str = Field(default="", description="git user.email")


class ReleaseConfig(BaseModel):
    """Configuration for a single run. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(min_length=1, description="Version from package.json")
    commit_message_pattern: str = Field(
        description="Regex whose first capture group is the released version",
    )
    tag_name: str = Field(
        default=DEFAULT_TAG_TEMPLATE,
        description="Tag name template, %s is replaced with the version",
    )
    tag_message: str = Field(
        default=DEFAULT_TAG_TEMPLATE,
        description="Tag annotation template, %s is replaced with the version",
    )
    tag_author: TagAuthor = Field(default_factory=TagAuthor)
    registry: str = Field(
        default=DEFAULT_REGISTRY,
        description="npm registry host (no scheme)",
    )
    access: Literal["public", "restricted"] = Field(
        default="public",
        description="Package access level passed to npm publish",
    )
    remote: str = Field(default="origin", description="Git remote receiving the tag")

    @field_validator("commit_message_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compile_pattern(v)
        except ConfigurationError as e:
            raise ValueError(e.message) from None
        return v

    @field_validator("tag_name", "tag_message")
    @classmethod
    def validate_template(cls, v: str) -> str:
        return _check_template(v)

    @field_validator("registry")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        for scheme in ("https://", "http://"):
            if v.startswith(scheme):
                v = v[len(scheme) :]
        return v.rstrip("/")


class FileConfig(BaseModel):
    """Defaults read from .github/autorelease.yml (or .yaml/.toml).

    Tokens are not accepted here and unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    commit_message_pattern: str | None = None
    tag_name: str | None = None
    tag_message: str | None = None
    git_user_name: str | None = None
    git_user_email: str | None = None
    registry: str | None = None
    access: Literal["public", "restricted"] | None = None
    remote: str | None = None


class ActionInputs(BaseSettings):
    """Action inputs as exposed by the runner.

    GitHub Actions passes `with:` values as INPUT_<NAME> environment
    variables and sets unused optional inputs to an empty string, which is
    treated as unset. Example: INPUT_COMMIT_MESSAGE_PATTERN='^release: (.+)$'
    """

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        env_ignore_empty=True,
        extra="ignore",
    )

    commit_message_pattern: str | None = None
    git_user_name: str | None = None
    git_user_email: str | None = None
    npm_token: SecretStr | None = None
    tag_name: str | None = None
    tag_message: str | None = None
    config_file: str | None = None

    def token(self) -> str:
        """Return the npm token, or an empty string when it is not set."""
        return self.npm_token.get_secret_value() if self.npm_token else ""
