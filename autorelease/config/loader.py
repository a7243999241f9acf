"""Configuration loading.

Reads the optional repository config file (YAML or TOML) and merges it with
the action inputs and the push event into a ReleaseConfig.
"""

import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from autorelease.config.models import ActionInputs, FileConfig, ReleaseConfig, TagAuthor
from autorelease.event import PushEvent
from autorelease.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

SEARCH_PATHS = [
    ".github/autorelease.yml",
    ".github/autorelease.yaml",
    "autorelease.yml",
    "autorelease.toml",
]


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            details="Top-level value must be a mapping",
        )
    return data


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    A [tool.autorelease] table is used when present, so the settings can
    live in an existing pyproject-style file.

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e

    section = data.get("tool", {}).get("autorelease")
    return section if isinstance(section, dict) else data


def find_config_file(workspace: Path) -> Path | None:
    for search_path in SEARCH_PATHS:
        candidate = workspace / search_path
        if candidate.is_file():
            return candidate
    return None


def load_file_config(path: Path | None, workspace: Path) -> FileConfig | None:
    """Load the repository config file.

    Args:
        path: Explicit config file (relative paths resolve against workspace)
        workspace: Workspace root, searched when path is None

    Returns:
        Parsed FileConfig, or None when no path was given and none was found

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    if path is None:
        config_path = find_config_file(workspace)
        if config_path is None:
            return None
    else:
        config_path = path if path.is_absolute() else workspace / path

    if config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    try:
        return FileConfig(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=str(e),
            fix_hint="Check the configuration keys and values",
        ) from e


def _first(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def build_config(
    version: str,
    inputs: ActionInputs,
    event: PushEvent,
    file_config: FileConfig | None = None,
) -> ReleaseConfig:
    """Merge inputs, config file and event into a ReleaseConfig.

    Precedence: action input, then config file, then event payload, then
    the model defaults.

    Raises:
        ConfigurationError: If a required value is missing or invalid
    """
    fc = file_config or FileConfig()
    owner = event.repository.owner

    pattern = _first(inputs.commit_message_pattern, fc.commit_message_pattern)
    if not pattern:
        raise ConfigurationError(
            "Input required and not supplied: commit_message_pattern",
            fix_hint="Set `commit_message_pattern` in the workflow step's `with:` block",
        )

    author = TagAuthor(
        name=_first(inputs.git_user_name, fc.git_user_name, owner.name, owner.login)
        or "",
        email=_first(inputs.git_user_email, fc.git_user_email, owner.email) or "",
    )

    values: dict[str, Any] = {
        "version": version,
        "commit_message_pattern": pattern,
        "tag_author": author,
    }
    optional = {
        "tag_name": _first(inputs.tag_name, fc.tag_name),
        "tag_message": _first(inputs.tag_message, fc.tag_message),
        "registry": fc.registry,
        "access": fc.access,
        "remote": fc.remote,
    }
    values.update({k: v for k, v in optional.items() if v})

    try:
        return ReleaseConfig(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid release configuration",
            details=str(e),
            fix_hint="Check commit_message_pattern and the tag templates",
        ) from e
