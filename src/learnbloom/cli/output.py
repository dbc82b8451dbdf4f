"""Rich output formatting for the learnbloom CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from learnbloom.core.errors import ErrorKind
from learnbloom.security.password import StrengthLevel

console = Console()


class KindColors:
    """Color per error kind and password strength level."""

    ERROR_KIND: dict[ErrorKind, str] = {
        ErrorKind.NETWORK_ERROR: "yellow",
        ErrorKind.API_ERROR: "red",
        ErrorKind.VALIDATION_ERROR: "magenta",
        ErrorKind.AUTHENTICATION_ERROR: "blue",
        ErrorKind.AUTHORIZATION_ERROR: "blue",
        ErrorKind.NOT_FOUND_ERROR: "cyan",
        ErrorKind.SERVER_ERROR: "red",
        ErrorKind.UNKNOWN_ERROR: "dim",
    }

    STRENGTH: dict[StrengthLevel, str] = {
        StrengthLevel.WEAK: "red",
        StrengthLevel.FAIR: "yellow",
        StrengthLevel.GOOD: "blue",
        StrengthLevel.STRONG: "green",
    }

    @classmethod
    def get_kind_color(cls, kind: ErrorKind) -> str:
        return cls.ERROR_KIND.get(kind, "white")

    @classmethod
    def get_strength_color(cls, level: StrengthLevel) -> str:
        return cls.STRENGTH.get(level, "white")


def format_check(passed: bool) -> str:
    """Rich-formatted pass/fail mark."""
    return "[green]✓[/green]" if passed else "[red]✗[/red]"


def create_simple_table(show_header: bool = False) -> Table:
    """Key-value table without box styling."""
    return Table(show_header=show_header, box=None)


def print_json(data: Any, console_instance: Console | None = None) -> None:
    """Print data as JSON without markup processing or line wrapping."""
    out = console_instance or console
    out.print_json(data=data, ensure_ascii=False)


__all__ = [
    "KindColors",
    "console",
    "create_simple_table",
    "format_check",
    "print_json",
]
