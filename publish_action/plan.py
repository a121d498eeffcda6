# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Publish planning: the npm commands to run, built as plain data.

Nothing in this module runs a process. build_plan() is a pure function of
the manifest, the release context and the options, so the whole command
sequence can be inspected before (or instead of) executing it.

References:
    - npm version: https://docs.npmjs.com/cli/commands/npm-version
    - npm view: https://docs.npmjs.com/cli/commands/npm-view
    - npm publish: https://docs.npmjs.com/cli/commands/npm-publish
"""

from __future__ import annotations

import enum
import os
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from publish_action.branch import MAINLINE_BRANCH, Lane, classify_ref, derive_version

if TYPE_CHECKING:
    from publish_action.manifest import Manifest

NPM = "npm"


class OutputMode(enum.Enum):
    """How an external command's output streams are handled."""

    # stdout and stderr go straight to the console
    INHERIT = "inherit"
    # stdout is captured, stderr goes to the console
    INHERIT_STDERR = "inherit-stderr"


@dataclass(frozen=True)
class ExternalCommand:
    """A single external command invocation."""

    program: str
    args: tuple[str, ...]
    cwd: str | None = None
    output: OutputMode = OutputMode.INHERIT

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector."""
        return [self.program, *self.args]

    def __str__(self) -> str:
        """Return the command as a shell-quoted string."""
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ReleaseContext:
    """Release information taken from the environment at process start."""

    ref: str
    commit_sha: str
    auth_token: str = field(repr=False)


@dataclass(frozen=True)
class PublishOptions:
    """Options recognized by publish()."""

    dir: str = "."
    dry_run: bool = False


@dataclass(frozen=True)
class PublishPlan:
    """Everything publish() decided, including the commands to run."""

    lane: Lane
    name: str
    version: str
    tag: str
    commands: tuple[ExternalCommand, ...]

    @property
    def spec(self) -> str:
        """Return the '<name>@<version>' package spec."""
        return f"{self.name}@{self.version}"


def publish_command(directory: str, tag: str) -> ExternalCommand:
    """Build the 'npm publish' command for a target directory and dist-tag."""
    return ExternalCommand(NPM, ("publish", directory, "--tag", tag, "--access", "public"))


def build_plan(
    manifest: Manifest,
    context: ReleaseContext,
    options: PublishOptions,
    cwd: str,
    mainline: str = MAINLINE_BRANCH,
) -> PublishPlan:
    """Build the publish plan for a manifest and release context.

    Release and feature branches set the derived version with 'npm version'
    (run inside the target directory) and then publish. The mainline publishes
    the manifest version as-is, after querying the registry for it.

    Args:
        manifest: The package manifest.
        context: Ref, commit and token for this run.
        options: Publish options; ``dir`` is the target directory.
        cwd: Base directory that ``options.dir`` is resolved against.
        mainline: Name of the mainline branch (default: 'master').

    Returns:
        PublishPlan with the lane, version, tag and ordered commands.
    """
    branch = classify_ref(context.ref, mainline)
    version = derive_version(branch, manifest.version, context.commit_sha)
    tag = branch.tag

    if branch.lane is Lane.MAINLINE:
        # The probe result is informational; publish always follows.
        first = ExternalCommand(
            NPM,
            ("view", f"{manifest.name}@{version}", "version"),
            output=OutputMode.INHERIT_STDERR,
        )
    else:
        first = ExternalCommand(NPM, ("version", version), cwd=os.path.join(cwd, options.dir))

    return PublishPlan(
        lane=branch.lane,
        name=manifest.name,
        version=version,
        tag=tag,
        commands=(first, publish_command(options.dir, tag)),
    )
