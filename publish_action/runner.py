# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Sequential execution of planned external commands."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import TYPE_CHECKING

from publish_action.errors import ExternalCommandError
from publish_action.plan import OutputMode

if TYPE_CHECKING:
    from publish_action.plan import ExternalCommand, PublishPlan

logger = logging.getLogger(__name__)

CommandRunner = Callable[["ExternalCommand"], str]


def run_command(command: ExternalCommand) -> str:
    """Run one external command to completion.

    Args:
        command: The command to execute.

    Returns:
        Captured stdout for OutputMode.INHERIT_STDERR, otherwise ''.

    Raises:
        ExternalCommandError: If the process exits non-zero or cannot start.
    """
    capture = command.output is OutputMode.INHERIT_STDERR
    logger.info("Running: %s", command)
    try:
        proc = subprocess.run(
            command.argv,
            cwd=command.cwd,
            stdout=subprocess.PIPE if capture else None,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ExternalCommandError(tuple(command.argv), -1, str(e)) from e

    if proc.returncode != 0:
        raise ExternalCommandError(tuple(command.argv), proc.returncode)

    return (proc.stdout or "") if capture else ""


def run_plan(plan: PublishPlan, runner: CommandRunner = run_command) -> list[str]:
    """Run every command of a plan in order, stopping at the first failure.

    Args:
        plan: The plan to execute.
        runner: Callable that runs a single command.

    Returns:
        The output of each command, in order.
    """
    return [runner(command) for command in plan.commands]
