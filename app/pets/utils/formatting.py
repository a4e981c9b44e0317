"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from pets.models.action import Cause

if TYPE_CHECKING:
    from pets.models.action import Action, ActionResult

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "added": "#c1ff62",
        "changed": "#0e8ac8",
    }
)

# Style of the cause column, by cause
CAUSE_STYLES: dict[Cause, str] = {
    Cause.PKG: "added",
    Cause.DIR: "added",
    Cause.LINK: "added",
    Cause.CREATE: "added",
    Cause.UPDATE: "changed",
    Cause.OWNER: "changed",
    Cause.MODE: "changed",
    Cause.POST: "info",
}


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_actions_table(actions: list[Action], dry_run: bool) -> Table:
    """Create a Rich table displaying planned actions.

    Args:
        actions: Actions in execution order.
        dry_run: Whether this is a dry-run.

    Returns:
        Rich Table configured for action display.
    """
    title = "Planned Actions (Dry Run)" if dry_run else "Planned Actions"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted")
    table.add_column("Cause", no_wrap=True)
    table.add_column("Trigger", style="muted")
    table.add_column("Command", style="text")

    for index, action in enumerate(actions, start=1):
        style = CAUSE_STYLES.get(action.cause, "text")
        trigger = action.trigger.label() if action.trigger is not None else "-"
        table.add_row(
            str(index),
            f"[{style}]{action.cause}[/{style}]",
            trigger,
            str(action.command),
        )

    return table


def create_results_table(results: list[ActionResult]) -> Table:
    """Create a Rich table displaying action results.

    Args:
        results: Results of executed actions.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Cause", no_wrap=True)
    table.add_column("Command")
    table.add_column("Message")

    for result in results:
        if result.success:
            status = "[success]OK[/success]"
            message = ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(
            status,
            str(result.action.cause),
            str(result.action.command),
            f"[muted]{message}[/muted]",
        )

    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
