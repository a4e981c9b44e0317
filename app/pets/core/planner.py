"""Action planner.

Compares the declared state of each DesiredFileSpec with live system state
and derives the actions needed to reconcile them. Every check fails closed:
when live state cannot be determined, the check logs the problem and emits
no action rather than guessing.

Ordering rules:
- The single package install action comes first, so that files belonging
  to freshly installed packages can be fixed up afterwards.
- Per spec, directory and link creation come before copy, owner and mode
  fixes, and the post-update command comes last, only if something fired.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pets.models.action import Action, Cause
from pets.utils.shell import Command

if TYPE_CHECKING:
    from pets.backends.base import PackageBackend
    from pets.models.spec import DesiredFileSpec

logger = logging.getLogger(__name__)

MKDIR = "/bin/mkdir"
LN = "/bin/ln"
CP = "/bin/cp"
CHOWN = "/bin/chown"
CHMOD = "/bin/chmod"


class Status(Enum):
    """Outcome of a single planner check.

    Attributes:
        ACTION: Live state diverges, an action is needed.
        IN_SYNC: Live state already matches the declaration.
        NOT_APPLICABLE: The spec does not declare what this check looks at.
        SUPPRESSED: Live state diverges or is unknown, but no action is
            taken (unreadable file, conflicting path...).
    """

    ACTION = "action"
    IN_SYNC = "in_sync"
    NOT_APPLICABLE = "not_applicable"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True, slots=True)
class Diagnosis:
    """Result of a planner check.

    Attributes:
        status: What the check concluded.
        action: Action to perform, set only when status is ACTION.
        detail: Human-readable explanation.
    """

    status: Status
    action: Action | None = None
    detail: str = ""

    def __post_init__(self) -> None:
        """Validate that only ACTION diagnoses carry an action."""
        if (self.status == Status.ACTION) != (self.action is not None):
            msg = f"Diagnosis {self.status.value} inconsistent with action {self.action}"
            raise ValueError(msg)


def _act(
    cause: Cause,
    command: Command,
    trigger: DesiredFileSpec | None,
    detail: str,
) -> Diagnosis:
    return Diagnosis(Status.ACTION, Action(cause=cause, command=command, trigger=trigger), detail)


def _suppress(detail: str) -> Diagnosis:
    logger.error(detail)
    return Diagnosis(Status.SUPPRESSED, detail=detail)


_NOT_APPLICABLE = Diagnosis(Status.NOT_APPLICABLE)


def sha256(path: str) -> str:
    """Return the hex SHA-256 digest of a file's content.

    Raises:
        OSError: If the file cannot be read.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def packages_to_install(specs: list[DesiredFileSpec], backend: PackageBackend) -> Diagnosis:
    """Collect all missing packages into a single install action.

    Installing everything in one go avoids running the package manager
    (and refreshing its caches) once per package.

    Args:
        specs: Validated specs.
        backend: Package backend of this host.

    Returns:
        Diagnosis with a PKG action naming every missing package.
    """
    queued: list[str] = []

    for spec in specs:
        for package in spec.packages:
            if package in queued:
                logger.debug("%s already marked to be installed", package)
            elif backend.is_installed(package):
                logger.debug("%s already installed", package)
            else:
                logger.info("%s not installed", package)
                queued.append(package)

    if not queued:
        return Diagnosis(Status.IN_SYNC, detail="all packages installed")

    command = backend.install_command().with_args(*queued)
    return _act(Cause.PKG, command, None, f"missing packages: {', '.join(queued)}")


def needs_directory(spec: DesiredFileSpec) -> Diagnosis:
    """Check whether the declared directory has to be created."""
    if not spec.directory:
        return _NOT_APPLICABLE

    if os.path.isdir(spec.directory):
        return Diagnosis(Status.IN_SYNC, detail=f"{spec.directory} exists already")

    if os.path.lexists(spec.directory):
        return _suppress(f"{spec.directory} already exists and is not a directory")

    return _act(
        Cause.DIR,
        Command(args=(MKDIR, "-p", spec.directory)),
        spec,
        f"{spec.directory} does not exist",
    )


def needs_link(spec: DesiredFileSpec) -> Diagnosis:
    """Check whether destination has to be created as a link to source.

    An existing destination is never replaced: a path that is not a link,
    or a link to something else, is reported and left alone.
    """
    if not spec.link or not spec.source or not spec.destination:
        return _NOT_APPLICABLE

    try:
        st = os.lstat(spec.destination)
    except FileNotFoundError:
        return _act(
            Cause.LINK,
            Command(args=(LN, "-s", spec.source, spec.destination)),
            spec,
            f"{spec.destination} does not exist",
        )
    except OSError as e:
        return _suppress(f"cannot lstat {spec.destination}: {e}")

    if not stat.S_ISLNK(st.st_mode):
        return _suppress(f"{spec.destination} already exists")

    target = os.path.realpath(spec.destination)
    if target == os.path.realpath(spec.source):
        logger.debug("%s is a symlink to %s already", spec.destination, spec.source)
        return Diagnosis(Status.IN_SYNC, detail=f"{spec.destination} links to {spec.source}")

    return _suppress(f"{spec.destination} is a symlink to {target} instead of {spec.source}")


def needs_copy(spec: DesiredFileSpec) -> Diagnosis:
    """Check whether source has to be copied over destination.

    Returns:
        CREATE if destination does not exist, UPDATE if contents differ.
    """
    if spec.link or not spec.source or not spec.destination:
        return _NOT_APPLICABLE

    try:
        sha_source = sha256(spec.source)
    except OSError as e:
        return _suppress(f"cannot determine sha256 of source file {spec.source}: {e}")

    command = Command(args=(CP, spec.source, spec.destination))

    try:
        sha_dest = sha256(spec.destination)
    except FileNotFoundError:
        return _act(Cause.CREATE, command, spec, f"{spec.destination} does not exist")
    except OSError as e:
        return _suppress(f"cannot determine sha256 of destination file {spec.destination}: {e}")

    if sha_source == sha_dest:
        logger.debug("same sha256 for %s and %s: %s", spec.source, spec.destination, sha_source)
        return Diagnosis(Status.IN_SYNC, detail=f"{spec.destination} up to date")

    logger.debug(
        "sha256[%s]=%s != sha256[%s]=%s",
        spec.source,
        sha_source,
        spec.destination,
        sha_dest,
    )
    return _act(Cause.UPDATE, command, spec, f"{spec.destination} differs from {spec.source}")


def needs_owner_fix(spec: DesiredFileSpec) -> Diagnosis:
    """Check whether destination needs a chown.

    If destination does not exist yet the chown is planned anyway, to run
    right after the file is created.
    """
    if not spec.destination or (spec.owner is None and spec.group is None):
        return _NOT_APPLICABLE

    # eg: 'root:staff', 'root', ':staff'
    arg = spec.owner.name if spec.owner is not None else ""
    if spec.group is not None:
        arg = f"{arg}:{spec.group.name}"

    command = Command(args=(CHOWN, arg, spec.destination))

    try:
        st = os.stat(spec.destination)
    except FileNotFoundError:
        return _act(Cause.OWNER, command, spec, f"{spec.destination} to be created")
    except OSError as e:
        return _suppress(f"cannot stat {spec.destination}: {e}")

    if spec.owner is not None and st.st_uid != spec.owner.id:
        logger.info(
            "%s is owned by uid %d instead of %s", spec.destination, st.st_uid, spec.owner.name
        )
        return _act(Cause.OWNER, command, spec, f"uid {st.st_uid} != {spec.owner.id}")

    if spec.group is not None and st.st_gid != spec.group.id:
        logger.info(
            "%s is owned by gid %d instead of %s", spec.destination, st.st_gid, spec.group.name
        )
        return _act(Cause.OWNER, command, spec, f"gid {st.st_gid} != {spec.group.id}")

    logger.debug("%s is owned by %d:%d already", spec.destination, st.st_uid, st.st_gid)
    return Diagnosis(Status.IN_SYNC, detail=f"{spec.destination} owned by {arg} already")


def needs_mode_fix(spec: DesiredFileSpec) -> Diagnosis:
    """Check whether destination needs a chmod.

    If destination does not exist yet the chmod is planned anyway, to run
    right after the file is created.
    """
    if not spec.destination or not spec.mode:
        return _NOT_APPLICABLE

    command = Command(args=(CHMOD, spec.mode, spec.destination))

    try:
        st = os.stat(spec.destination)
    except FileNotFoundError:
        return _act(Cause.MODE, command, spec, f"{spec.destination} to be created")
    except OSError as e:
        return _suppress(f"cannot stat {spec.destination}: {e}")

    want = spec.mode_bits
    have = stat.S_IMODE(st.st_mode)

    if have != want:
        logger.info("%s is %04o instead of %04o", spec.destination, have, want)
        return _act(Cause.MODE, command, spec, f"mode {have:04o} != {want:04o}")

    logger.debug("%s is %04o already", spec.destination, want)
    return Diagnosis(Status.IN_SYNC, detail=f"{spec.destination} is {spec.mode} already")


# Evaluated in this order for every spec.
SPEC_CHECKS = (needs_directory, needs_link, needs_copy, needs_owner_fix, needs_mode_fix)


def plan_spec(spec: DesiredFileSpec) -> list[Action]:
    """Return the actions needed to reconcile a single spec.

    The post-update command is only appended if another action fired.
    """
    actions: list[Action] = []

    for check in SPEC_CHECKS:
        diagnosis = check(spec)
        logger.debug(
            "%s(%s): %s %s", check.__name__, spec.label(), diagnosis.status.value, diagnosis.detail
        )
        if diagnosis.action is not None:
            actions.append(diagnosis.action)
        if check is needs_link and diagnosis.status == Status.SUPPRESSED:
            # The destination is not our link: leave whatever is there alone.
            break

    if actions and spec.post is not None:
        actions.append(Action(cause=Cause.POST, command=spec.post, trigger=spec))

    return actions


def build_action_plan(specs: list[DesiredFileSpec], backend: PackageBackend) -> list[Action]:
    """Build the ordered list of actions reconciling all specs.

    Args:
        specs: Validated specs.
        backend: Package backend of this host.

    Returns:
        Actions in execution order; empty if the system is in sync.
    """
    actions: list[Action] = []

    pkg = packages_to_install(specs, backend)
    if pkg.action is not None:
        actions.append(pkg.action)

    for spec in specs:
        actions.extend(plan_spec(spec))

    for action in actions:
        logger.info("Planned %s", action)

    return actions
