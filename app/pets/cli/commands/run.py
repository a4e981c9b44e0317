"""Run command implementation.

Reconciles the system with the annotated configuration files: installs
missing packages, creates directories and links, copies files, fixes
owners and modes, and runs post-update commands.
"""

from pathlib import Path
from typing import Annotated

import typer

from pets.backends import BackendNotFoundError
from pets.core.pipeline import PipelineResult, run_pipeline
from pets.core.settings import Settings, SettingsError, load_settings
from pets.core.validator import ValidationError
from pets.utils.formatting import (
    console,
    create_actions_table,
    create_results_table,
    print_error,
    print_info,
    print_success,
)
from pets.utils.logging import setup_logging

app = typer.Typer(
    help="Reconcile the system with the configuration.",
    invoke_without_command=True,
)


def require_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def reconcile(
    conf_dir: Path | None,
    *,
    dry_run: bool,
    debug: bool,
    strict_pre: bool,
) -> PipelineResult:
    """Run the pipeline with settings overridden by command line flags.

    Prints the planned actions, and the results unless on a dry run.

    Raises:
        typer.Exit: With code 1 if the run could not complete or an action failed.
    """
    settings = require_settings()
    setup_logging(debug or settings.debug)

    directory = conf_dir or settings.conf_dir
    allow_missing_pre = settings.allow_missing_pre and not strict_pre

    try:
        result = run_pipeline(
            directory,
            dry_run=dry_run,
            allow_missing_pre=allow_missing_pre,
        )
    except BackendNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        print_error(f"Configuration rejected: {e}")
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"Cannot read configuration directory {directory}: {e}")
        raise typer.Exit(code=1) from e

    if result.in_sync:
        print_success("System is already in sync with the configuration. Nothing to do.")
        return result

    console.print(create_actions_table(result.actions, dry_run))

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return result

    console.print(create_results_table(result.results))

    if not result.success:
        skipped = len(result.actions) - len(result.results)
        print_error(f"Action failed, {skipped} remaining action(s) not executed.")
        raise typer.Exit(code=1)

    print_success(f"All {len(result.results)} action(s) completed successfully.")
    return result


@app.callback(invoke_without_command=True)
def run_configuration(
    ctx: typer.Context,
    conf_dir: Annotated[
        Path | None,
        typer.Option(
            "--conf-dir",
            "-c",
            help="Directory of annotated configuration files (default: ~/pets).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            "-d",
            help="Enable debug logging.",
        ),
    ] = False,
    strict_pre: Annotated[
        bool,
        typer.Option(
            "--strict-pre",
            help="Fail validation when a pre-update command is not installed.",
        ),
    ] = False,
) -> None:
    """Reconcile the system with the configuration.

    Examples:
        pets run                      # Apply ~/pets
        pets run --conf-dir ./pets    # Apply another directory
        pets run --dry-run            # Preview changes
    """
    if ctx.invoked_subcommand is not None:
        return

    reconcile(conf_dir, dry_run=dry_run, debug=debug, strict_pre=strict_pre)
