"""Shell execution utilities.

Provides subprocess execution with captured output. Commands are always
passed to the OS as a literal argument vector, never through a shell.
"""

import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Command:
    """An external command to be executed.

    Attributes:
        args: Executable and arguments, passed verbatim to the OS.
        env: Extra environment variables merged over the current environment.
    """

    args: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate command data and freeze the environment."""
        if not self.args:
            msg = "Command cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @classmethod
    def from_string(cls, text: str) -> "Command | None":
        """Build a command by splitting text on whitespace.

        Args:
            text: Command line such as ``"/usr/sbin/sshd -t -f"``.

        Returns:
            Command, or None if text holds no words.
        """
        words = text.split()
        if not words:
            return None
        return cls(args=tuple(words))

    def with_args(self, *extra: str) -> "Command":
        """Return a copy of this command with arguments appended."""
        return Command(args=(*self.args, *extra), env=dict(self.env))

    def __str__(self) -> str:
        prefix = " ".join(f"{key}={value}" for key, value in self.env.items())
        line = " ".join(self.args)
        return f"{prefix} {line}" if prefix else line


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished child process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True if the child exited with status 0."""
        return self.returncode == 0


def run_command(args: list[str], *, env: Mapping[str, str] | None = None) -> CommandResult:
    """Run a child process to completion and capture its output.

    The call blocks until the child exits; no timeout is applied. Undecodable
    output bytes are replaced rather than raising.

    Args:
        args: Executable followed by its arguments.
        env: Variables to set on top of the inherited environment.

    Raises:
        FileNotFoundError: If the executable does not exist.
        OSError: If the child cannot be started.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        errors="replace",
        env={**os.environ, **env} if env else None,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def run(command: Command) -> CommandResult:
    """Execute a Command, merging its extra environment.

    Raises:
        FileNotFoundError: If the executable is not found.
        OSError: If the command cannot be started.
    """
    return run_command(list(command.args), env=command.env or None)


def command_exists(name: str) -> bool:
    """Check whether an executable named name is on PATH."""
    return shutil.which(name) is not None
