"""package.json reader.

The manifest is the single source of the version being released.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from autorelease.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    MissingVersionError,
)

MANIFEST_NAME = "package.json"


class PackageManifest(BaseModel):
    """The parts of package.json autorelease reads.

    Unknown fields are preserved in model_extra.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str | None = None
    version: str


def load_package_json(workspace: Path) -> dict[str, Any]:
    """Parse package.json from the workspace root.

    Args:
        workspace: Workspace root directory

    Returns:
        Parsed package.json object

    Raises:
        ManifestNotFoundError: If package.json does not exist
        ManifestParseError: If the file cannot be read as a JSON object
    """
    path = workspace / MANIFEST_NAME
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ManifestNotFoundError(
            f"{MANIFEST_NAME} not found",
            details=f"Expected {MANIFEST_NAME} at {path}",
            fix_hint="Check out the repository before running autorelease",
        ) from None
    except json.JSONDecodeError as e:
        raise ManifestParseError(
            f"Invalid JSON in {path}",
            details=str(e),
        ) from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(
            f"{path} is not valid UTF-8",
            details=str(e),
        ) from e
    except OSError as e:
        raise ManifestParseError(
            f"Cannot read {path}",
            details=str(e),
        ) from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            f"Invalid {MANIFEST_NAME}: expected an object",
            details=f"Top-level value is {type(data).__name__}",
        )
    return data


def read_manifest(workspace: Path) -> PackageManifest:
    """Load package.json and validate its version field.

    Raises:
        ManifestNotFoundError: If package.json does not exist
        ManifestParseError: If the file cannot be read as a JSON object
        MissingVersionError: If version is absent, empty or not a string
    """
    data = load_package_json(workspace)

    version = data.get("version")
    if not isinstance(version, str) or not version:
        raise MissingVersionError(
            "missing version field!",
            details=f"{workspace / MANIFEST_NAME} has version={version!r}",
            fix_hint='Add a "version" string to package.json',
        )

    name = data.get("name")
    if not isinstance(name, str):
        data = {**data, "name": None}
    return PackageManifest.model_validate(data)


def read_version(workspace: Path) -> str:
    """Return the version declared in package.json."""
    return read_manifest(workspace).version
