# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Main entry point for the npm Publish Action.

This module reads the action inputs and GitHub context from the environment
and hands them to publish().

References:
    - GitHub Actions Environment Variables:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
    - GitHub Actions Outputs:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/passing-information-between-jobs#setting-an-output-parameter
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass

from publish_action.errors import ConfigurationError, ExternalCommandError, ManifestError
from publish_action.plan import PublishOptions, PublishPlan, ReleaseContext
from publish_action.publish import publish
from publish_action.status import CommitStatusAPI

logger = logging.getLogger(__name__)


@dataclass
class ActionInputs:
    """Parsed action inputs from CLI arguments or environment variables."""

    dir: str
    dry_run: bool
    debug: bool
    github_token: str = ""
    repository: str = ""


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


def parse_inputs(args: list[str] | None = None) -> ActionInputs:
    """Parse action inputs from CLI arguments or environment variables.

    CLI arguments take precedence over environment variables.

    Args:
        args: Optional list of CLI arguments. If None, uses environment
              variables only (GitHub Actions mode).

    Returns:
        ActionInputs with parsed values.
    """
    parser = argparse.ArgumentParser(
        prog="npm-publish-action",
        description="npm Publish Action - version and publish a package by branch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  GITHUB_REF                   Ref being built (e.g. refs/heads/master)
  GITHUB_SHA                   Commit being built
  NPM_AUTH_TOKEN               npm token (required)
  INPUT_DIR                    Directory containing package.json
  INPUT_DRY_RUN                Dry-run mode, don't run npm (true/false)
  INPUT_DEBUG                  Enable debug logging (true/false)
  INPUT_GITHUB_TOKEN, GITHUB_TOKEN
                               GitHub token for commit statuses (optional)

Branches:
  release-X.Y.Z                publishes X.Y.Z-rc.<sha> with tag 'next'
  master                       publishes package.json version with tag 'latest'
  anything else                publishes 0.0.0-<sha> with tag 'canary'
        """,
    )

    parser.add_argument(
        "--dir",
        default=os.environ.get("INPUT_DIR", "") or ".",
        help="Directory containing package.json (default: from INPUT_DIR or '.')",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("INPUT_DRY_RUN"),
        help="Dry-run mode - log the npm commands without running them",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("INPUT_DEBUG"),
        help="Enable debug logging",
    )

    parsed = parser.parse_args(args if args is not None else [])

    return ActionInputs(
        dir=parsed.dir,
        dry_run=parsed.dry_run,
        debug=parsed.debug,
        github_token=os.environ.get("INPUT_GITHUB_TOKEN", os.environ.get("GITHUB_TOKEN", "")),
        repository=os.environ.get("GITHUB_REPOSITORY", ""),
    )


def parse_context() -> ReleaseContext:
    """Parse the release context from environment variables.

    Returns:
        ReleaseContext with the ref, commit and npm token.
    """
    return ReleaseContext(
        ref=os.environ.get("GITHUB_REF", ""),
        commit_sha=os.environ.get("GITHUB_SHA", ""),
        auth_token=os.environ.get("NPM_AUTH_TOKEN", ""),
    )


def set_outputs(plan: PublishPlan) -> None:
    """Write action outputs to GITHUB_OUTPUT file.

    Args:
        plan: The executed publish plan.
    """
    output_file = os.environ.get("GITHUB_OUTPUT", "")
    if not output_file:
        logger.warning("GITHUB_OUTPUT not set, outputs will not be written")
        return

    with open(output_file, "a") as f:
        f.write(f"name={plan.name}\n")
        f.write(f"version={plan.version}\n")
        f.write(f"tag={plan.tag}\n")
        f.write(f"lane={plan.lane.value}\n")

    logger.info("Set outputs: version=%s, tag=%s", plan.version, plan.tag)


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def create_reporter(inputs: ActionInputs) -> CommitStatusAPI | None:
    """Create the commit status reporter, or None if it cannot be configured."""
    if not inputs.github_token or not inputs.repository:
        logger.warning("GITHUB_TOKEN or GITHUB_REPOSITORY not set, commit statuses will not be reported")
        return None
    try:
        return CommitStatusAPI(token=inputs.github_token, repository=inputs.repository)
    except ValueError as e:
        logger.warning("Failed to initialize GitHub API: %s", e)
        return None


def main(args: list[str] | None = None) -> None:
    """Main entry point for the action."""
    inputs = parse_inputs(args)
    configure_logging(inputs.debug)

    context = parse_context()
    logger.debug("Ref: %s, SHA: %s", context.ref, context.commit_sha)

    reporter = None if inputs.dry_run else create_reporter(inputs)
    options = PublishOptions(dir=inputs.dir, dry_run=inputs.dry_run)

    try:
        plan = publish(context, options, reporter=reporter)
    except (ConfigurationError, ManifestError) as e:
        logger.error("%s", e)
        sys.exit(1)
    except ExternalCommandError as e:
        logger.error("%s", e)
        sys.exit(e.returncode if e.returncode > 0 else 1)

    set_outputs(plan)


def cli() -> None:  # pragma: no cover
    """Console script entry point."""
    main(sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    cli()
