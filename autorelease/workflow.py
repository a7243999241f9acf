"""Release workflow orchestration.

Runs the release step for one push:
1. Read the version from package.json
2. Build the release config from inputs, config file and event
3. Look for the release commit among the pushed commits
4. Publish to npm
5. Create and push the release tag

Errors never escape run(): they are turned into a RunOutcome whose
exit_code the CLI hands back to the runner.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from autorelease import actions
from autorelease.commits import matches
from autorelease.config.loader import build_config
from autorelease.config.models import ActionInputs, FileConfig, ReleaseConfig
from autorelease.event import PushEvent
from autorelease.exceptions import NEUTRAL_EXIT_CODE, ConfigurationError, ReleaseError
from autorelease.git.client import GitClient, VersionControlClient
from autorelease.manifest import read_manifest
from autorelease.publishers.base import PackageRegistryClient, PublishContext
from autorelease.publishers.npm import NPMClient, NPMPublisher
from autorelease.tagging import TagResult, TagStatus, create_tag


class WorkflowState(Enum):
    START = "start"
    MANIFEST_LOADED = "manifest_loaded"
    CONFIG_BUILT = "config_built"
    MATCH_FOUND = "match_found"
    NO_MATCH = "no_match"
    PUBLISHED = "published"
    TAG_CREATED = "tag_created"
    TAG_SKIPPED_EXISTS = "tag_skipped_exists"
    TAG_FAILED = "tag_failed"
    DONE = "done"
    FAILED = "failed"
    NEUTRAL_EXIT = "neutral_exit"


class OutcomeKind(Enum):
    SUCCESS = "success"
    NEUTRAL = "neutral"
    FAILURE = "failure"


@dataclass
class RunOutcome:
    """How a run ended.

    Attributes:
        kind: SUCCESS, NEUTRAL (skipped, not failed) or FAILURE
        state: Final workflow state
        message: Reason shown to the user
        error: The error behind a FAILURE or NEUTRAL outcome
        version: Version read from package.json, when it got that far
        tag_name: Resolved tag name, when the tag step ran
        published: Whether npm publish succeeded
    """

    kind: OutcomeKind
    state: WorkflowState
    message: str
    error: ReleaseError | None = None
    version: str | None = None
    tag_name: str | None = None
    published: bool = False

    @classmethod
    def success(
        cls,
        state: WorkflowState,
        message: str,
        error: ReleaseError | None = None,
        version: str | None = None,
        tag_name: str | None = None,
        published: bool = False,
    ) -> "RunOutcome":
        return cls(
            OutcomeKind.SUCCESS, state, message, error, version, tag_name, published
        )

    @classmethod
    def neutral(
        cls,
        state: WorkflowState,
        reason: str,
        error: ReleaseError | None = None,
        version: str | None = None,
        tag_name: str | None = None,
        published: bool = False,
    ) -> "RunOutcome":
        return cls(
            OutcomeKind.NEUTRAL, state, reason, error, version, tag_name, published
        )

    @classmethod
    def failure(
        cls,
        error: ReleaseError,
        version: str | None = None,
        published: bool = False,
    ) -> "RunOutcome":
        return cls(
            OutcomeKind.FAILURE,
            WorkflowState.FAILED,
            error.message,
            error,
            version=version,
            published=published,
        )

    @property
    def exit_code(self) -> int:
        if self.kind is OutcomeKind.SUCCESS:
            return 0
        if self.kind is OutcomeKind.NEUTRAL:
            return NEUTRAL_EXIT_CODE
        code = self.error.exit_code if self.error else 1
        # A failure must never look like the neutral status
        return 1 if code in (0, NEUTRAL_EXIT_CODE) else code


def resolve_workspace(value: str | os.PathLike[str] | None) -> Path:
    """Turn the GITHUB_WORKSPACE value into an existing directory.

    Raises:
        ConfigurationError: If the value is unset, empty or not a directory
    """
    if value is None or str(value) == "":
        raise ConfigurationError(
            "Workspace directory is not set",
            details="GITHUB_WORKSPACE is empty or unset",
            fix_hint="Run inside GitHub Actions or pass --workspace",
        )
    workspace = Path(value)
    if not workspace.is_dir():
        raise ConfigurationError(
            f"Workspace directory does not exist: {workspace}",
            fix_hint="Check out the repository before this step",
        )
    return workspace


@dataclass
class ReleaseWorkflow:
    """Orchestrates one release run."""

    workspace: Path
    event: PushEvent
    inputs: ActionInputs
    registry_client: PackageRegistryClient
    vcs: VersionControlClient
    file_config: FileConfig | None = None
    dry_run: bool = False

    # State tracking
    state: WorkflowState = field(default=WorkflowState.START, init=False)
    history: list[WorkflowState] = field(
        default_factory=lambda: [WorkflowState.START], init=False
    )
    config: ReleaseConfig | None = field(default=None, init=False)
    version: str | None = field(default=None, init=False)

    def _enter(self, state: WorkflowState) -> None:
        self.state = state
        self.history.append(state)

    def run(self) -> RunOutcome:
        """Execute the workflow.

        Returns:
            RunOutcome; errors are captured in it, not raised
        """
        try:
            return self._run()
        except ReleaseError as e:
            self._enter(WorkflowState.FAILED)
            return RunOutcome.failure(
                e,
                version=self.version,
                published=WorkflowState.PUBLISHED in self.history,
            )

    def _run(self) -> RunOutcome:
        actions.info(f"WORKSPACE: {self.workspace}")
        manifest = read_manifest(self.workspace)
        self.version = manifest.version
        self._enter(WorkflowState.MANIFEST_LOADED)
        actions.info(manifest.model_dump_json(include={"name", "version"}))

        config = build_config(manifest.version, self.inputs, self.event, self.file_config)
        self.config = config
        self._enter(WorkflowState.CONFIG_BUILT)
        actions.info("=== config ===")
        actions.info(config.model_dump_json())

        if not matches(config.commit_message_pattern, config.version, self.event.commits):
            self._enter(WorkflowState.NO_MATCH)
            self._enter(WorkflowState.DONE)
            actions.info("Not a release commit. Exiting.")
            return RunOutcome.success(
                self.state, "Not a release commit", version=config.version
            )
        self._enter(WorkflowState.MATCH_FOUND)

        context = PublishContext(
            workspace=self.workspace,
            version=config.version,
            token=self.inputs.token(),
            registry=config.registry,
            access=config.access,
            package_name=manifest.name,
            dry_run=self.dry_run,
        )
        publish_result = NPMPublisher(self.registry_client).publish(context)
        self._enter(WorkflowState.PUBLISHED)
        actions.info(publish_result.message)
        if publish_result.registry_url:
            actions.info(f"Registry: {publish_result.registry_url}")
        if publish_result.package_url:
            actions.info(f"Package: {publish_result.package_url}")

        tag_result = create_tag(config, config.version, self.vcs, dry_run=self.dry_run)
        return self._finish(tag_result, config.version)

    def _finish(self, tag_result: TagResult, version: str) -> RunOutcome:
        tag_name = tag_result.tag_name
        published = not self.dry_run

        if tag_result.status is TagStatus.EXISTS:
            actions.error(tag_result.message)
            self._enter(WorkflowState.TAG_SKIPPED_EXISTS)
            self._enter(WorkflowState.NEUTRAL_EXIT)
            return RunOutcome.neutral(
                self.state,
                tag_result.message,
                tag_result.error,
                version=version,
                tag_name=tag_name,
                published=published,
            )

        if tag_result.status is TagStatus.FAILED:
            # Publishing already happened; a missing tag can be added by hand
            actions.error(tag_result.message)
            if tag_result.error is not None:
                actions.error(str(tag_result.error))
            self._enter(WorkflowState.TAG_FAILED)
            return RunOutcome.success(
                self.state,
                f"Published {version} without tag {tag_name}",
                tag_result.error,
                version=version,
                tag_name=tag_name,
                published=published,
            )

        actions.info(tag_result.message)
        if tag_result.status is TagStatus.CREATED:
            self._enter(WorkflowState.TAG_CREATED)
        else:
            self._enter(WorkflowState.DONE)
        return RunOutcome.success(
            self.state,
            tag_result.message,
            version=version,
            tag_name=tag_name,
            published=published,
        )


def execute_release(
    workspace: Path,
    event: PushEvent,
    inputs: ActionInputs,
    file_config: FileConfig | None = None,
    dry_run: bool = False,
    registry_client: PackageRegistryClient | None = None,
    vcs: VersionControlClient | None = None,
) -> RunOutcome:
    """Run a release with the npm and git CLIs unless clients are given.

    This is the main entry point used by the CLI.
    """
    workflow = ReleaseWorkflow(
        workspace=workspace,
        event=event,
        inputs=inputs,
        registry_client=registry_client or NPMClient(workspace),
        vcs=vcs or GitClient(workspace),
        file_config=file_config,
        dry_run=dry_run,
    )
    return workflow.run()
