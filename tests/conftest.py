"""Shared pytest fixtures for the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from publish_action.plan import ExternalCommand, ReleaseContext


def make_context(ref: str, sha: str = "deadfad", token: str = "secret") -> ReleaseContext:
    """Create a ReleaseContext for the given ref.

    This is a shared helper used across multiple test modules.
    """
    return ReleaseContext(ref=ref, commit_sha=sha, auth_token=token)


class RecordingRunner:
    """Command runner that records commands instead of executing them."""

    def __init__(self, outputs: dict[str, str] | None = None) -> None:
        self.calls: list[ExternalCommand] = []
        self._outputs = outputs or {}

    def __call__(self, command: ExternalCommand) -> str:
        self.calls.append(command)
        return self._outputs.get(command.args[0], "")

    @property
    def argvs(self) -> list[list[str]]:
        return [command.argv for command in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    """Create a recording command runner."""
    return RecordingRunner()


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes package.json under tmp_path."""

    def _write(name: str = "pkg", version: str = "1.0.0", subdir: str = ".") -> Path:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "package.json").write_text(json.dumps({"name": name, "version": version}))
        return directory

    return _write


@pytest.fixture
def mock_status_api() -> MagicMock:
    """Create a mock CommitStatusAPI instance for unit tests."""
    mock_api = MagicMock()
    mock_api.create_status.return_value = None
    return mock_api


@pytest.fixture
def mock_github_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock GitHub environment variables."""
    env_vars = {
        "GITHUB_REF": "refs/heads/feature-x",
        "GITHUB_SHA": "deadfad",
        "GITHUB_REPOSITORY": "owner/repo",
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
        "NPM_AUTH_TOKEN": "secret",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("GITHUB_TOKEN", "INPUT_GITHUB_TOKEN", "INPUT_DIR", "INPUT_DRY_RUN", "INPUT_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    return env_vars


@pytest.fixture
def mock_pygithub() -> Generator[dict[str, Any], None, None]:
    """Patch PyGithub for unit tests."""
    with patch("publish_action.status.Github") as mock_github:
        mock_repo = MagicMock()
        mock_github.return_value.get_repo.return_value = mock_repo
        yield {"github": mock_github, "repo": mock_repo}
