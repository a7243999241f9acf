"""Command-line interface for autorelease.

Provides commands for:
- run: Publish and tag when the push contains the release commit
- check: Show the resolved configuration and the release decision
"""

from pathlib import Path
from typing import NoReturn

import typer
from rich.markup import escape
from rich.table import Table

from autorelease import __version__, actions
from autorelease.commits import matches
from autorelease.config.loader import build_config, load_file_config
from autorelease.config.models import ActionInputs, FileConfig
from autorelease.event import PushEvent, load_event
from autorelease.exceptions import ConfigurationError, ReleaseError
from autorelease.manifest import read_manifest
from autorelease.tagging import expand_template
from autorelease.workflow import OutcomeKind, RunOutcome, execute_release, resolve_workspace

app = typer.Typer(
    name="autorelease",
    help="Publish to npm and tag the release when a release commit is pushed",
    add_completion=False,
    no_args_is_help=True,
)

console = actions.console


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"autorelease version {__version__}")
        raise typer.Exit()


def fail(error: ReleaseError) -> NoReturn:
    """Report error to the runner and exit with its code."""
    actions.error(str(error))
    raise typer.Exit(code=error.exit_code)


def load_inputs(
    workspace: str | None,
    event_path: Path | None,
    config: Path | None,
) -> tuple[Path, PushEvent, ActionInputs, FileConfig | None]:
    """Resolve the workspace, event payload, action inputs and config file.

    Raises:
        ConfigurationError: If any of them is missing or invalid
    """
    inputs = ActionInputs()
    ws = resolve_workspace(workspace)
    if event_path is None:
        raise ConfigurationError(
            "Event payload path is not set",
            details="GITHUB_EVENT_PATH is empty or unset",
            fix_hint="Run inside GitHub Actions or pass --event-path",
        )
    event = load_event(event_path)
    config_path = config
    if config_path is None and inputs.config_file:
        config_path = Path(inputs.config_file)
    file_config = load_file_config(config_path, ws)
    return ws, event, inputs, file_config


def write_outputs(outcome: RunOutcome) -> None:
    actions.set_output("released", "true" if outcome.published else "false")
    actions.set_output("version", outcome.version or "")
    actions.set_output("tag", outcome.tag_name or "")


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Release automation for npm packages on push.

    When one of the pushed commits matches the release pattern for the
    version in package.json, publish to npm and push a version tag.
    """
    pass


@app.command()
def run(
    workspace: str | None = typer.Option(  # noqa: B008
        None,
        "--workspace",
        "-w",
        envvar="GITHUB_WORKSPACE",
        help="Repository checkout containing package.json",
    ),
    event_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--event-path",
        "-e",
        envvar="GITHUB_EVENT_PATH",
        help="Push event payload (JSON)",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Config file (YAML or TOML); searched in the workspace if omitted",
    ),
    dry_run: bool = typer.Option(  # noqa: B008
        False,
        "--dry-run",
        "-n",
        help="Decide and report without publishing or tagging",
    ),
) -> None:
    """Publish and tag if the push contains the release commit.

    Exit codes:
        0   released, or not a release commit
        78  the release tag already exists (neutral)
        2-5 configuration, manifest, tag or registry error

    Examples:
        autorelease run
        autorelease run --workspace . --event-path event.json --dry-run
    """
    try:
        ws, event, inputs, file_config = load_inputs(workspace, event_path, config)
    except ReleaseError as e:
        fail(e)

    outcome = execute_release(ws, event, inputs, file_config=file_config, dry_run=dry_run)
    write_outputs(outcome)

    if outcome.kind is OutcomeKind.FAILURE and outcome.error is not None:
        fail(outcome.error)
    if outcome.kind is OutcomeKind.NEUTRAL:
        actions.warning(f"Skipped: {outcome.message}")
    raise typer.Exit(code=outcome.exit_code)


@app.command()
def check(
    workspace: str | None = typer.Option(  # noqa: B008
        None,
        "--workspace",
        "-w",
        envvar="GITHUB_WORKSPACE",
        help="Repository checkout containing package.json",
    ),
    event_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--event-path",
        "-e",
        envvar="GITHUB_EVENT_PATH",
        help="Push event payload (JSON)",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Config file (YAML or TOML); searched in the workspace if omitted",
    ),
) -> None:
    """Show the resolved configuration and whether this push is a release.

    Runs no npm or git commands.
    """
    try:
        ws, event, inputs, file_config = load_inputs(workspace, event_path, config)
        manifest = read_manifest(ws)
        cfg = build_config(manifest.version, inputs, event, file_config)
        is_release = matches(cfg.commit_message_pattern, cfg.version, event.commits)
    except ReleaseError as e:
        fail(e)

    table = Table(title="Release Check")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Package", escape(manifest.name or "Unknown"))
    table.add_row("Version", escape(cfg.version))
    table.add_row("Pattern", escape(cfg.commit_message_pattern))
    table.add_row("Commits", str(len(event.commits)))
    table.add_row("Release Commit", "[green]yes[/green]" if is_release else "[yellow]no[/yellow]")
    table.add_row("Tag", escape(expand_template(cfg.tag_name, cfg.version)))
    table.add_row("Tagger", escape(f"{cfg.tag_author.name} <{cfg.tag_author.email}>"))
    table.add_row("Registry", f"https://{cfg.registry} ({cfg.access})")
    table.add_row("npm Token", "set" if inputs.token() else "[red]missing[/red]")

    console.print(table)
    actions.set_output("release_commit", "true" if is_release else "false")


if __name__ == "__main__":
    app()
