"""Custom exception hierarchy for autorelease.

Exit codes:
- 1: General error
- 2: Configuration error (inputs, pattern, event payload, config file)
- 3: Manifest error (package.json missing, unparsable or without version)
- 4: Tag error (git subprocess failure while tagging)
- 5: Registry error (npm publish failure)
- 78: Tag already exists (neutral, not a failure)
"""

NEUTRAL_EXIT_CODE = 78


class ReleaseError(Exception):
    """Base exception for all autorelease errors.

    Each subclass defines an exit_code used when the error ends the run.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(ReleaseError):
    """Configuration errors.

    Raised when:
    - A required input is missing (commit_message_pattern, npm_token)
    - The commit message pattern does not compile or has no capture group
    - The workspace directory or event payload cannot be resolved
    - An optional config file has invalid syntax or values
    """

    exit_code = 2


class ManifestError(ReleaseError):
    """Base class for package.json problems."""

    exit_code = 3


class ManifestNotFoundError(ManifestError):
    """package.json does not exist in the workspace."""


class ManifestParseError(ManifestError):
    """package.json is not a valid JSON object."""


class MissingVersionError(ManifestError):
    """package.json has no usable version field."""


class TagError(ReleaseError):
    """Git failures while creating or pushing the release tag.

    Raised when:
    - The tag existence check fails
    - Setting the tagger identity fails
    - Annotated tag creation fails
    - Pushing the tag to the remote fails

    The workflow logs these and keeps the run successful.
    """

    exit_code = 4


class TagExistsError(TagError):
    """The release tag is already present.

    Signals "already done": the run ends with the neutral exit code.
    """

    exit_code = NEUTRAL_EXIT_CODE


class RegistryError(ReleaseError):
    """Publishing failures.

    Raised when:
    - npm is not installed
    - Writing .npmrc fails
    - npm config or npm publish exits non-zero (including duplicate versions)

    Never retried: re-running publish for a version the registry already has
    fails the same way.
    """

    exit_code = 5
