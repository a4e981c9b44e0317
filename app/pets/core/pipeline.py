"""Reconciliation pipeline.

parse -> validate -> plan -> execute, single-threaded and synchronous.
Only one pipeline may run against the live filesystem at a time: two
concurrent runs could both see a file missing and both create it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pets.backends import detect_backend
from pets.core.executor import execute_plan
from pets.core.parser import parse_files
from pets.core.planner import build_action_plan
from pets.core.validator import check_global_constraints, check_local_constraints

if TYPE_CHECKING:
    from pathlib import Path

    from pets.backends.base import PackageBackend
    from pets.models.action import Action, ActionResult
    from pets.models.spec import DesiredFileSpec

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    """Outcome of one reconciliation run.

    Attributes:
        specs: All parsed specs.
        valid: Specs that passed local validation.
        actions: Planned actions in execution order.
        results: Results of executed actions (empty on a dry run).
        executed: Whether execution was attempted.
    """

    specs: list[DesiredFileSpec] = field(default_factory=list)
    valid: list[DesiredFileSpec] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    results: list[ActionResult] = field(default_factory=list)
    executed: bool = False

    @property
    def success(self) -> bool:
        """Check that every planned action was executed successfully."""
        if not self.executed:
            return True
        return len(self.results) == len(self.actions) and all(r.success for r in self.results)

    @property
    def in_sync(self) -> bool:
        """Check if nothing had to be done."""
        return not self.actions


def run_pipeline(
    conf_dir: Path,
    *,
    dry_run: bool = False,
    allow_missing_pre: bool = True,
    backend: PackageBackend | None = None,
) -> PipelineResult:
    """Reconcile the system with the configuration in conf_dir.

    Args:
        conf_dir: Directory holding annotated configuration files.
        dry_run: Stop after planning.
        allow_missing_pre: Tolerate pre-update commands that are not
            installed yet.
        backend: Package backend to use. Detected if None.

    Returns:
        PipelineResult describing what was planned and executed.

    Raises:
        BackendNotFoundError: If no package manager is found.
        DuplicateDestinationError: If two specs target the same destination.
        OSError: If the configuration directory cannot be read.
    """
    if backend is None:
        backend = detect_backend()

    result = PipelineResult()

    logger.debug("* configuration parsing starts *")
    result.specs = parse_files(conf_dir)
    logger.debug("* configuration parsing ends *")

    logger.debug("* configuration validation starts *")
    check_global_constraints(result.specs)
    result.valid = check_local_constraints(result.specs, backend, allow_missing_pre)
    logger.debug("* configuration validation ends *")

    result.actions = build_action_plan(result.valid, backend)

    if dry_run:
        logger.info("Dry run: %d action(s) planned, none executed", len(result.actions))
        return result

    result.executed = True
    result.results = execute_plan(result.actions)
    return result
