"""Settings commands.

Shows and initializes the pets settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from pets.cli.commands.run import require_settings
from pets.core.paths import get_settings_path
from pets.core.settings import Settings, SettingsError, save_settings
from pets.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    settings = require_settings()
    path = get_settings_path()

    table = Table(
        title=f"Settings ({path})" if path.exists() else "Settings (defaults)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="text")

    table.add_row("conf_dir", str(settings.conf_dir))
    table.add_row("debug", str(settings.debug).lower())
    table.add_row("allow_missing_pre", str(settings.allow_missing_pre).lower())

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_settings_path()

    if path.exists() and not force:
        print_info(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
