"""Password command: score a password's strength."""

from __future__ import annotations

import typer
from rich.markup import escape

from learnbloom.security.password import calculate_password_strength

from ..helpers import configure_global_logging
from ..output import KindColors, console, create_simple_table, format_check, print_json

_CHECK_LABELS = {
    "length": "At least 8 characters",
    "lowercase": "Lowercase letter",
    "uppercase": "Uppercase letter",
    "number": "Digit",
    "special": "Special character",
    "no_common": "Not a common password",
}


def password(
    value: str = typer.Argument(..., metavar="PASSWORD", help="Password to score"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Score a password and list what would make it stronger."""
    configure_global_logging(console)

    strength = calculate_password_strength(value)

    if json_output:
        print_json(strength.to_dict())
        return

    color = KindColors.get_strength_color(strength.level)
    console.print(
        f"Strength: [{color}]{strength.label}[/{color}] ({strength.score}/100)"
    )
    console.print(f"[dim]{strength.description}[/dim]")
    console.print()

    table = create_simple_table()
    table.add_column("Check")
    table.add_column("Requirement")
    for field_name, passed in strength.to_dict()["checks"].items():
        table.add_row(format_check(passed), _CHECK_LABELS[field_name])
    console.print(table)

    if strength.suggestions:
        console.print()
        console.print("[dim]Suggestions:[/dim]")
        for suggestion in strength.suggestions:
            console.print(f"  [dim]•[/dim] {escape(suggestion)}")
