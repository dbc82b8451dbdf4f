"""learnbloom command-line interface.

Built with Typer. Global options (version and logging) are handled by the
app callback before any command runs; commands live in ``commands/``.

    cli/
    ├── __init__.py    # app assembly and global options
    ├── helpers.py     # logging state and config loading
    ├── output.py      # Rich formatting
    └── commands/
        ├── classify.py
        ├── network.py
        ├── password.py
        └── validate.py
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from learnbloom import __version__

from . import helpers as helpers
from .commands import check_network, classify, password, validate
from .helpers import (
    configure_global_logging,
    set_log_file,
    set_log_format,
    set_log_level,
)
from .output import console

app = typer.Typer(
    name="learnbloom",
    help="Error classification and connectivity tools for the Learn Bloom client",
    add_completion=False,
)


# =============================================================================
# Global option callbacks
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Learn Bloom v{__version__}")
        raise typer.Exit()


def log_level_callback(value: str | None) -> str | None:
    if value:
        set_log_level(value)
    return value


def log_file_callback(value: Path | None) -> Path | None:
    if value:
        set_log_file(value)
    return value


def log_format_callback(value: str | None) -> str | None:
    if value:
        set_log_format(value)
    return value


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="LEARNBLOOM_LOG_LEVEL",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            callback=log_file_callback,
            help="Path for log file output",
            envvar="LEARNBLOOM_LOG_FILE",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json, console, or both",
            envvar="LEARNBLOOM_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """Learn Bloom - error classification and connectivity tools."""
    configure_global_logging(console)


app.command()(classify)
app.command()(password)
app.command(name="check-network")(check_network)
app.command()(validate)


__all__ = ["app", "console", "main"]
