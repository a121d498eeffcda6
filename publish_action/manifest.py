# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Reading the package manifest (package.json)."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from publish_action.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True)
class Manifest:
    """Name and version of the package being published."""

    name: str
    version: str


def read_manifest(directory: str) -> Manifest:
    """Read name and version from <directory>/package.json.

    Args:
        directory: Directory containing package.json.

    Returns:
        Manifest with the package name and version.

    Raises:
        ManifestError: If the file is missing or unreadable, is not valid JSON, or lacks a
            string 'name' or 'version'.
    """
    path = os.path.join(directory, MANIFEST_FILENAME)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"No {MANIFEST_FILENAME} found in '{directory}'") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"{path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")

    for field in ("name", "version"):
        if not isinstance(data.get(field), str) or not data[field]:
            raise ManifestError(f"{path} is missing a '{field}' field")

    logger.debug("Read manifest %s@%s from %s", data["name"], data["version"], path)
    return Manifest(name=data["name"], version=data["version"])
