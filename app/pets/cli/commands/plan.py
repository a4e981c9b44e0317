"""Plan command implementation.

Shows the actions a run would perform, without executing them.
"""

from pathlib import Path
from typing import Annotated

import typer

from pets.cli.commands.run import reconcile

app = typer.Typer(
    help="Show planned actions without executing them.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def plan_configuration(
    ctx: typer.Context,
    conf_dir: Annotated[
        Path | None,
        typer.Option(
            "--conf-dir",
            "-c",
            help="Directory of annotated configuration files (default: ~/pets).",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            "-d",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """Show the actions needed to reconcile the system (same as run --dry-run)."""
    if ctx.invoked_subcommand is not None:
        return

    reconcile(conf_dir, dry_run=True, debug=debug, strict_pre=False)
