"""Utility modules for pets.

This module exports the command execution helpers. Console helpers live
in pets.utils.formatting.
"""

from pets.utils.shell import Command, CommandResult, command_exists, run, run_command

__all__ = [
    "Command",
    "CommandResult",
    "command_exists",
    "run",
    "run_command",
]
