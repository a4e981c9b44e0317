"""Action models for reconciliation.

This module defines the corrective actions produced by the planner and
the results of executing them.
"""

from dataclasses import dataclass
from enum import Enum

from pets.models.spec import DesiredFileSpec
from pets.utils.shell import Command


class Cause(Enum):
    """Reason behind a planned action.

    Attributes:
        NONE: No reason at all. Never attached to an action.
        PKG: Required packages are missing.
        DIR: Directory is missing and needs to be created.
        LINK: Symbolic link is missing and needs to be created.
        CREATE: Destination file is missing and needs to be created.
        UPDATE: Destination file differs from source.
        OWNER: Destination needs chown.
        MODE: Destination needs chmod.
        POST: Post-update command.
    """

    NONE = "none"
    PKG = "pkg"
    DIR = "dir"
    LINK = "link"
    CREATE = "create"
    UPDATE = "update"
    OWNER = "owner"
    MODE = "mode"
    POST = "post"

    @property
    def label(self) -> str:
        """Return the display label of this cause."""
        return _CAUSE_LABELS[self]

    def __str__(self) -> str:
        return self.label


_CAUSE_LABELS: dict[Cause, str] = {
    Cause.NONE: "NONE",
    Cause.PKG: "PACKAGE_INSTALL",
    Cause.DIR: "DIR_CREATE",
    Cause.LINK: "LINK_CREATE",
    Cause.CREATE: "FILE_CREATE",
    Cause.UPDATE: "FILE_UPDATE",
    Cause.OWNER: "OWNER",
    Cause.MODE: "CHMOD",
    Cause.POST: "POST_UPDATE",
}


@dataclass(frozen=True, slots=True)
class Action:
    """A command to run because live state diverges from declared state.

    Attributes:
        cause: Why this action exists.
        command: Command that realizes the action.
        trigger: Spec the action originates from. None for the package install.
    """

    cause: Cause
    command: Command
    trigger: DesiredFileSpec | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if self.cause == Cause.NONE:
            msg = "Action cause cannot be NONE"
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.trigger is not None:
            return f"[{self.cause}] {self.trigger.label()} triggered command: '{self.command}'"
        return f"[{self.cause}] triggered command: '{self.command}'"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing an action.

    Attributes:
        action: The action that was executed.
        success: Whether the command ran and exited with status zero.
        stdout: Captured standard output.
        stderr: Captured standard error.
        error: Error message if the action failed.
    """

    action: Action
    success: bool
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
