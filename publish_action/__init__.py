# Copyright (c) 2026 Mark Ferrell. MIT License.
"""npm Publish Action - Core modules."""

from publish_action.branch import BranchClass, Lane, classify_branch, classify_ref
from publish_action.errors import ConfigurationError, ExternalCommandError, ManifestError
from publish_action.manifest import Manifest, read_manifest
from publish_action.plan import ExternalCommand, OutputMode, PublishOptions, PublishPlan, ReleaseContext, build_plan
from publish_action.publish import publish

__all__ = [
    "BranchClass",
    "ConfigurationError",
    "ExternalCommand",
    "ExternalCommandError",
    "Lane",
    "Manifest",
    "ManifestError",
    "OutputMode",
    "PublishOptions",
    "PublishPlan",
    "ReleaseContext",
    "build_plan",
    "classify_branch",
    "classify_ref",
    "publish",
    "read_manifest",
]
