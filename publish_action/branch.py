# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Branch classification for npm publishing.

This module turns a git ref into a branch name and sorts it into one of the
three publishing lanes, each with its own version and dist-tag derivation.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - npm dist-tag: https://docs.npmjs.com/cli/commands/npm-dist-tag
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAINLINE_BRANCH = "master"

# SemVer 2.0.0 compliant pattern: no leading zeros allowed
# Pattern: release-X.Y.Z where X, Y and Z are non-negative integers
# The whole name must match; release-1.2.3-hotfix is a feature branch
RELEASE_BRANCH_PATTERN = re.compile(r"^release-((?:0|[1-9][0-9]*)\.(?:0|[1-9][0-9]*)\.(?:0|[1-9][0-9]*))$")

REF_PREFIX_PATTERN = re.compile(r"^refs/(?:heads|tags)/")


class Lane(enum.Enum):
    """Publishing lane a branch falls into."""

    FEATURE = "feature"
    RELEASE = "release"
    MAINLINE = "mainline"


# Distribution tag published for each lane
DIST_TAGS = {
    Lane.FEATURE: "canary",
    Lane.RELEASE: "next",
    Lane.MAINLINE: "latest",
}


@dataclass(frozen=True)
class BranchClass:
    """Result of classifying a branch name.

    ``release_version`` carries the X.Y.Z taken from the branch name and is
    only set for the release lane.
    """

    lane: Lane
    name: str
    release_version: str | None = None

    @property
    def tag(self) -> str:
        """Return the npm dist-tag for this lane."""
        return DIST_TAGS[self.lane]


def strip_ref(ref: str) -> str:
    """Strip the leading ref path from a git ref.

    Args:
        ref: Full git ref (e.g., 'refs/heads/feature-x').

    Returns:
        The bare branch name. Refs without a known prefix are returned as-is.

    Examples:
        >>> strip_ref("refs/heads/release-1.2.3")
        'release-1.2.3'
        >>> strip_ref("master")
        'master'
    """
    return REF_PREFIX_PATTERN.sub("", ref, count=1)


def classify_branch(branch_name: str, mainline: str = MAINLINE_BRANCH) -> BranchClass:
    """Classify a branch name into a publishing lane.

    Args:
        branch_name: Bare branch name (e.g., 'release-2.0.0').
        mainline: Name of the mainline branch (default: 'master').

    Returns:
        BranchClass describing the lane.

    Examples:
        >>> classify_branch("release-2.0.0").release_version
        '2.0.0'
        >>> classify_branch("master").lane
        <Lane.MAINLINE: 'mainline'>
        >>> classify_branch("feature-x").tag
        'canary'
    """
    match = RELEASE_BRANCH_PATTERN.match(branch_name)
    if match:
        logger.debug("Branch '%s' is a release branch for %s", branch_name, match.group(1))
        return BranchClass(lane=Lane.RELEASE, name=branch_name, release_version=match.group(1))

    if branch_name == mainline:
        logger.debug("Branch '%s' is the mainline branch", branch_name)
        return BranchClass(lane=Lane.MAINLINE, name=branch_name)

    logger.debug("Branch '%s' is a feature branch", branch_name)
    return BranchClass(lane=Lane.FEATURE, name=branch_name)


def classify_ref(ref: str, mainline: str = MAINLINE_BRANCH) -> BranchClass:
    """Classify a full git ref. See classify_branch()."""
    return classify_branch(strip_ref(ref), mainline)


def derive_version(branch: BranchClass, manifest_version: str, commit_sha: str) -> str:
    """Derive the version to publish for a classified branch.

    Args:
        branch: The classified branch.
        manifest_version: The version currently in package.json.
        commit_sha: Commit identifier, used verbatim.

    Returns:
        'X.Y.Z-rc.<sha>' for release branches, the manifest version for the
        mainline, and '0.0.0-<sha>' for everything else.
    """
    if branch.lane is Lane.RELEASE:
        return f"{branch.release_version}-rc.{commit_sha}"
    if branch.lane is Lane.MAINLINE:
        return manifest_version
    return f"0.0.0-{commit_sha}"
