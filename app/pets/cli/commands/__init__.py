"""CLI commands for pets.

This package contains all subcommand implementations.
"""

from pets.cli.commands import config, plan, run

__all__ = ["config", "plan", "run"]
