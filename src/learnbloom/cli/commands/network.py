"""check-network command: probe backend reachability."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.markup import escape

from learnbloom.core.config import ConnectivityConfig
from learnbloom.network.connectivity import NetworkProbeResult, probe_with_retry

from ..helpers import configure_global_logging, load_app_config
from ..output import console, create_simple_table, format_check, print_json


def check_network(
    url: str | None = typer.Option(None, "--url", "-u", help="URL to probe (default from config)"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", min=0.1, max=120.0, help="Per-attempt timeout in seconds"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", exists=True, readable=True, help="YAML config file"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Check whether the backend is reachable, retrying failed probes.

    Exit codes:
      0: Reachable
      1: Unreachable after all attempts, or invalid config
    """
    configure_global_logging(console)

    app_config = load_app_config(config_file, console)
    updates: dict[str, object] = {}
    if url is not None:
        updates["probe_url"] = url
    if timeout is not None:
        updates["timeout_seconds"] = timeout
    connectivity: ConnectivityConfig = app_config.connectivity.model_copy(update=updates)

    result = asyncio.run(probe_with_retry(connectivity))
    _output_result(result, json_output)

    if not result.success:
        raise typer.Exit(1)


def _output_result(result: NetworkProbeResult, json_output: bool) -> None:
    if json_output:
        print_json(result.to_dict())
        return

    table = create_simple_table()
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row(result.test, format_check(result.success))
    if "url" in result.details:
        table.add_row("URL", escape(str(result.details["url"])))
    if "status" in result.details:
        table.add_row("HTTP status", str(result.details["status"]))
    table.add_row("Duration", f"{result.duration_ms:.0f} ms")
    table.add_row("Attempts", str(result.details.get("attempts", 1)))
    if result.error:
        table.add_row("Error", f"[red]{escape(result.error)}[/red]")
    console.print(table)
