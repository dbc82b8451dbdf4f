"""Classify command: show how a described failure would be presented."""

from __future__ import annotations

from typing import Any

import typer
from rich.markup import escape

from learnbloom.core.errors import ErrorClassifier

from ..helpers import configure_global_logging
from ..output import KindColors, console, create_simple_table, print_json


def classify(
    code: str | None = typer.Option(None, "--code", "-c", help="Backend data-error code, e.g. PGRST116"),
    status: int | None = typer.Option(None, "--status", "-s", help="HTTP-like status code"),
    message: str | None = typer.Option(None, "--message", "-m", help="Raw error message"),
    name: str | None = typer.Option(None, "--name", "-n", help="Error name, e.g. NetworkError"),
    offline: bool = typer.Option(False, "--offline", help="Classify as if the device were offline"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Classify a failure described by its code, status, message and name.

    Prints the error kind, display title, user-facing message and status.
    """
    configure_global_logging(console)

    raw: dict[str, Any] = {}
    if code is not None:
        raw["code"] = code
    if status is not None:
        raw["status"] = status
    if message is not None:
        raw["message"] = message
    if name is not None:
        raw["name"] = name

    classified = ErrorClassifier().classify(raw, online=not offline)

    if json_output:
        result = classified.to_dict()
        result["title"] = classified.title
        print_json(result)
        return

    color = KindColors.get_kind_color(classified.kind)
    table = create_simple_table()
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Kind", f"[{color}]{classified.kind.value}[/{color}]")
    table.add_row("Title", classified.title)
    table.add_row("Message", escape(classified.message))
    table.add_row("Status", str(classified.status_code) if classified.status_code else "-")
    console.print(table)
