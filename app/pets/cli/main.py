"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pets import __version__
from pets.cli.commands import config, plan, run

# Create main Typer app
app = typer.Typer(
    name="pets",
    help="Configure your machine from annotated configuration files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pets version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """pets - configure your machine from annotated configuration files.

    Files carrying a "pets:" modeline in their first lines declare where
    they belong, who owns them, which packages they need, and how to
    validate and reload them.
    """


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(plan.app, name="plan")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
