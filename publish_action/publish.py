# Copyright (c) 2026 Mark Ferrell. MIT License.
"""The publish operation: plan an npm publish for a ref and carry it out.

publish() never reads the environment itself; the caller builds a
ReleaseContext once and passes it in.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from github.GithubException import GithubException

from publish_action.errors import ConfigurationError, ExternalCommandError
from publish_action.manifest import read_manifest
from publish_action.plan import PublishOptions, PublishPlan, ReleaseContext, build_plan
from publish_action.runner import CommandRunner, run_command, run_plan
from publish_action.status import status_description, status_url

if TYPE_CHECKING:
    from publish_action.status import CommitStatusAPI

logger = logging.getLogger(__name__)


def publish(
    context: ReleaseContext,
    options: PublishOptions | None = None,
    *,
    runner: CommandRunner = run_command,
    reporter: CommitStatusAPI | None = None,
    cwd: str | None = None,
) -> PublishPlan:
    """Version and publish the package for the given release context.

    Args:
        context: Ref, commit and npm token for this run.
        options: Target directory and dry-run flag (default: '.' and False).
        runner: Callable that runs a single external command.
        reporter: Optional commit status reporter.
        cwd: Base directory for resolving ``options.dir`` (default: os.getcwd()).

    Returns:
        The plan that was executed (or, in dry-run mode, would have been).

    Raises:
        ConfigurationError: If the npm auth token is missing or empty.
        ManifestError: If package.json cannot be read.
        ExternalCommandError: If any npm command fails. Earlier commands are
            not rolled back.
    """
    if not context.auth_token:
        raise ConfigurationError("You must set the NPM_AUTH_TOKEN environment variable")

    options = options or PublishOptions()
    base = cwd if cwd is not None else os.getcwd()
    manifest = read_manifest(os.path.join(base, options.dir))
    plan = build_plan(manifest, context, options, base)

    logger.info(
        "Publishing %s on %s lane with tag '%s'",
        plan.spec,
        plan.lane.value,
        plan.tag,
    )

    if options.dry_run:
        for command in plan.commands:
            logger.info("[DRY-RUN] Would run: %s", command)
        if reporter is not None:
            logger.info("[DRY-RUN] Would set status: %s", status_description("success", plan.spec))
        return plan

    _report(reporter, context, plan, "pending")
    try:
        outputs = run_plan(plan, runner)
    except ExternalCommandError:
        try:
            _report(reporter, context, plan, "error")
        except GithubException as e:
            logger.warning("Failed to set error status on %s: %s", context.commit_sha[:7], e)
        raise

    _log_probe(plan, outputs)
    _report(reporter, context, plan, "success")
    logger.info("Published %s with tag '%s'", plan.spec, plan.tag)
    return plan


def _log_probe(plan: PublishPlan, outputs: list[str]) -> None:
    """Log what the mainline registry probe reported, if one ran."""
    for command, output in zip(plan.commands, outputs):
        if command.args[:1] == ("view",) and output.strip():
            logger.warning("Registry already listed %s before publishing", plan.spec)


def _report(
    reporter: CommitStatusAPI | None,
    context: ReleaseContext,
    plan: PublishPlan,
    state: str,
) -> None:
    if reporter is None:
        return
    reporter.create_status(
        context.commit_sha,
        state,
        status_description(state, plan.spec),
        status_url(plan.spec),
    )
