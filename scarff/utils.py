"""Shared console helpers for Scarff.

All user-facing output goes through the module-level Rich ``console`` so the
CLI can silence or de-colour it in one place.  The domain layer never imports
this module.
"""

from __future__ import annotations

import re
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def configure_console(*, quiet: bool = False, no_color: bool = False) -> None:
    """Apply global output flags; ``quiet`` never silences stderr."""
    console.quiet = quiet
    for con in (console, err_console):
        con.no_color = no_color


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def validate_project_name(name: str) -> str | None:
    """Return a reason string when *name* cannot be used as a project directory.

    Examples::

        validate_project_name("my-app")  -> None
        validate_project_name(".hidden") -> "name cannot start with '.'"
    """
    if not name:
        return "name cannot be empty"
    if name.startswith("."):
        return "name cannot start with '.'"
    if "/" in name or "\\" in name:
        return "name cannot contain path separators"
    if re.search(r"[\x00-\x1f]", name):
        return "name cannot contain control characters"
    return None


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_panel(body: str, title: str, style: str = "cyan") -> None:
    console.print(Panel(body, title=title, border_style=style))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{message}[/bold yellow]")


def print_status(message: str) -> None:
    """Print a dim progress line to stderr, honouring --quiet."""
    if not console.quiet:
        err_console.print(f"[dim]{message}[/dim]")
