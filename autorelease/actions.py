"""CI log channel.

Plain messages go to a rich console. Errors, warnings, groups and secret
masks are written as GitHub Actions workflow commands so the runner turns
them into annotations and collapsible sections.
"""

import os
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console

console = Console(soft_wrap=True, emoji=False, highlight=False)


def escape_data(value: str) -> str:
    """Escape a workflow command payload (%, CR and LF)."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _command(name: str, value: str) -> None:
    console.print(f"::{name}::{escape_data(value)}", markup=False)


def info(message: str) -> None:
    console.print(message, markup=False)


def warning(message: str) -> None:
    _command("warning", message)


def error(message: str) -> None:
    _command("error", message)


def mask(secret: str) -> None:
    """Ask the runner to redact secret from all further log output."""
    if secret:
        _command("add-mask", secret)


def start_group(title: str) -> None:
    _command("group", title)


def end_group() -> None:
    console.print("::endgroup::", markup=False)


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything logged inside the block under a collapsible title."""
    start_group(title)
    try:
        yield
    finally:
        end_group()


def format_output(name: str, value: str) -> str:
    """Render one $GITHUB_OUTPUT entry.

    Values containing a line break use the name<<DELIMITER form with a
    random delimiter, so they cannot start another entry.
    """
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def set_output(name: str, value: str) -> None:
    """Append a step output to $GITHUB_OUTPUT when running under Actions."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    with Path(output_path).open("a", encoding="utf-8") as f:
        f.write(format_output(name, value))
