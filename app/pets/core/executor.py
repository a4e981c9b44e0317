"""Action execution.

Runs planned actions one at a time. Later actions may depend on earlier
ones (a file needs its package installed, a chmod needs the file to
exist), so the first failure stops the run.
"""

import logging

from pets.models.action import Action, ActionResult
from pets.utils.shell import run

logger = logging.getLogger(__name__)


def perform(action: Action) -> ActionResult:
    """Run the command of an action.

    A command that cannot be started yields a failed result rather than
    an exception.

    Args:
        action: Action to execute.

    Returns:
        ActionResult with captured output.
    """
    try:
        result = run(action.command)
    except OSError as e:
        logger.error("running %s -> %s", action.command, e)
        return ActionResult(action=action, success=False, error=str(e))

    if result.stdout:
        logger.info("stdout from %s -> %s", action.command, result.stdout)

    if result.stderr:
        logger.error("stderr from %s -> %s", action.command, result.stderr)

    if not result.success:
        error = f"exit status {result.returncode}"
        logger.error("running %s -> %s", action.command, error)
        return ActionResult(
            action=action,
            success=False,
            stdout=result.stdout,
            stderr=result.stderr,
            error=error,
        )

    return ActionResult(
        action=action,
        success=True,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def execute_plan(actions: list[Action]) -> list[ActionResult]:
    """Execute actions in order, stopping at the first failure.

    Args:
        actions: Ordered actions from the planner.

    Returns:
        Results of the actions that were attempted. If the last one failed,
        the remaining actions were not run.
    """
    results: list[ActionResult] = []

    for action in actions:
        logger.info("Executing %s", action)
        result = perform(action)
        results.append(result)

        if result.failed:
            trigger = action.trigger.source if action.trigger is not None else "-"
            logger.error(
                "Action failed, aborting: cause=%s trigger=%s command='%s': %s",
                action.cause,
                trigger,
                action.command,
                result.error,
            )
            skipped = len(actions) - len(results)
            if skipped:
                logger.error("%d remaining action(s) not executed", skipped)
            break

    return results
