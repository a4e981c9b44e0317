"""Configuration validator.

Given the parsed DesiredFileSpec objects, check that our sanity constraints
are met. Global constraints hold across all specs (no two specs may target
the same destination) and abort the whole run when violated. Local
constraints hold for individual specs (packages exist, the pre-update
validation command passes); a spec failing them is dropped and the rest
proceed.
"""

import logging

from pets.backends.base import PackageBackend
from pets.core.planner import needs_copy
from pets.models.spec import DesiredFileSpec
from pets.utils.shell import run

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Base exception for validation errors that abort the run."""


class DuplicateDestinationError(ValidationError):
    """Raised when two specs declare the same destination."""

    def __init__(self, destination: str, first: DesiredFileSpec, second: DesiredFileSpec) -> None:
        self.destination = destination
        self.first = first
        self.second = second
        super().__init__(
            f"duplicate definition for '{destination}': '{second.source}' and '{first.source}'"
        )


def check_global_constraints(specs: list[DesiredFileSpec]) -> None:
    """Validate assumptions that must hold across all specs.

    Args:
        specs: Parsed specs in declaration order.

    Raises:
        DuplicateDestinationError: On the first destination declared twice.
    """
    seen: dict[str, DesiredFileSpec] = {}

    for spec in specs:
        if not spec.destination:
            continue
        other = seen.get(spec.destination)
        if other is not None:
            raise DuplicateDestinationError(spec.destination, other, spec)
        seen[spec.destination] = spec


def run_pre(spec: DesiredFileSpec, allow_missing: bool) -> bool:
    """Run the pre-update validation command of a spec.

    The source path is appended as last argument, e.g.
    ``/usr/sbin/sshd -t -f /home/pets/ssh/sshd_config``.

    Args:
        spec: Spec whose pre command to run.
        allow_missing: If True, a validation command that cannot be found
            passes. On a first run the package providing it may not be
            installed yet.

    Returns:
        True if the command passed or was not declared, False otherwise.
    """
    command = spec.pre_command()
    if command is None:
        return True

    try:
        result = run(command)
    except FileNotFoundError as e:
        if allow_missing:
            logger.info(
                "pre-update command %s not found, ignoring for now (package not installed yet?)",
                command,
            )
            return True
        logger.error("pre-update command %s: %s", command, e)
        return False
    except OSError as e:
        logger.error("pre-update command %s: %s", command, e)
        return False

    if result.stdout:
        logger.info("stdout from pre-update command %s: %s", command, result.stdout)
    if result.stderr:
        logger.error("stderr from pre-update command %s: %s", command, result.stderr)

    if result.success:
        logger.info("pre-update command %s successful", command)
        return True

    logger.error("pre-update command %s exited with status %d", command, result.returncode)
    return False


def is_valid(spec: DesiredFileSpec, backend: PackageBackend, allow_missing_pre: bool) -> bool:
    """Check the local constraints of a single spec.

    Args:
        spec: Spec to check.
        backend: Package backend of this host.
        allow_missing_pre: Passed to run_pre.

    Returns:
        True if the spec can be reconciled.
    """
    for package in spec.packages:
        if not backend.exists_in_repository(package):
            return False

    # The pre command only matters if the content is going to change.
    if needs_copy(spec).action is not None and not run_pre(spec, allow_missing_pre):
        return False

    return True


def check_local_constraints(
    specs: list[DesiredFileSpec],
    backend: PackageBackend,
    allow_missing_pre: bool,
) -> list[DesiredFileSpec]:
    """Validate assumptions that must hold for individual specs.

    An error in one spec means it is skipped; the others proceed.

    Args:
        specs: Specs that passed the global constraints.
        backend: Package backend of this host.
        allow_missing_pre: Tolerate pre commands that are not installed yet.

    Returns:
        Specs that passed validation, in their original order.
    """
    valid: list[DesiredFileSpec] = []

    for spec in specs:
        if is_valid(spec, backend, allow_missing_pre):
            valid.append(spec)
        else:
            logger.error("Skipping invalid declaration %s", spec.label())

    return valid
