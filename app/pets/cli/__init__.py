"""CLI package for pets.

This package contains the Typer application and all subcommands.
"""

from pets.cli.main import app

__all__ = ["app"]
