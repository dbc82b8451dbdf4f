"""Validate command: check a YAML configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
import yaml
from pydantic import ValidationError
from rich.markup import escape

from learnbloom.core.config import AppConfig

from ..helpers import ErrorMessages, configure_global_logging
from ..output import console, create_simple_table, print_json


def validate(
    config_file: Path = typer.Argument(
        ...,
        help="Path to YAML configuration file",
        exists=True,
        readable=True,
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Validate a configuration file.

    Exit codes:
      0: Valid
      1: Invalid (YAML syntax or schema errors)
    """
    configure_global_logging(console)

    try:
        raw_yaml = config_file.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"{ErrorMessages.CONFIG_READ_ERROR}: {e}", json_output)

    try:
        yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        _fail(f"{ErrorMessages.YAML_SYNTAX_ERROR}: {e}", json_output)

    try:
        config = AppConfig.from_yaml_string(raw_yaml)
    except ValidationError as e:
        _fail(f"{ErrorMessages.SCHEMA_ERROR}: {e}", json_output)

    if json_output:
        print_json({"valid": True, "config": config.model_dump(mode="json")})
        return

    console.print("[green]✓[/green] YAML syntax valid")
    console.print("[green]✓[/green] Schema validation passed")
    console.print()
    console.print("[dim]Configuration summary:[/dim]")
    table = create_simple_table()
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Environment", config.environment)
    table.add_row(
        "Retry",
        f"{config.retry.max_retries} attempts, {config.retry.base_delay_ms:g} ms base delay",
    )
    table.add_row("Log level", config.logging.level)
    table.add_row("Probe URL", escape(config.connectivity.probe_url))
    table.add_row("Reporting", "enabled" if config.reporting.enabled else "disabled")
    console.print(table)


def _fail(message: str, json_output: bool) -> NoReturn:
    if json_output:
        print_json({"valid": False, "error": message})
    else:
        console.print(f"[red]Invalid:[/red] {escape(message)}")
    raise typer.Exit(1)
