"""Unit tests for status.py - CommitStatusAPI wrapper and status text."""

from unittest.mock import MagicMock, patch

import pytest
from github.GithubException import GithubException

from publish_action.status import CommitStatusAPI, status_description, status_url


class TestCommitStatusAPIInit:
    """Tests for CommitStatusAPI initialization and token handling."""

    def test_init_with_explicit_token_and_repo(self, mock_pygithub):
        """CommitStatusAPI initializes with explicit token and repository."""
        CommitStatusAPI(token="test-token", repository="owner/repo")

        mock_pygithub["github"].assert_called_once_with("test-token")
        mock_pygithub["github"].return_value.get_repo.assert_called_once_with("owner/repo")

    def test_init_with_env_vars(self, monkeypatch, mock_pygithub):
        """CommitStatusAPI uses environment variables when parameters not provided."""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("GITHUB_REPOSITORY", "env-owner/env-repo")

        CommitStatusAPI()

        mock_pygithub["github"].assert_called_once_with("env-token")
        mock_pygithub["github"].return_value.get_repo.assert_called_once_with("env-owner/env-repo")

    def test_init_missing_token_raises_error(self, monkeypatch):
        """CommitStatusAPI raises ValueError when token is missing."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")

        with pytest.raises(ValueError, match="GitHub token is required"):
            CommitStatusAPI()

    def test_init_missing_repository_raises_error(self, monkeypatch):
        """CommitStatusAPI raises ValueError when repository is missing."""
        monkeypatch.setenv("GITHUB_TOKEN", "test-token")
        monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)

        with pytest.raises(ValueError, match="Repository is required"):
            CommitStatusAPI()


class TestCreateStatus:
    """Tests for CommitStatusAPI.create_status method."""

    def test_create_status_on_commit(self, mock_pygithub):
        """create_status posts a status on the given commit."""
        mock_commit = MagicMock()
        mock_pygithub["repo"].get_commit.return_value = mock_commit

        api = CommitStatusAPI(token="test-token", repository="owner/repo")
        api.create_status("abc123", "pending", "Publishing pkg@1.0.0", "https://unpkg.com/pkg@1.0.0/")

        mock_pygithub["repo"].get_commit.assert_called_once_with("abc123")
        mock_commit.create_status.assert_called_once_with(
            state="pending",
            target_url="https://unpkg.com/pkg@1.0.0/",
            description="Publishing pkg@1.0.0",
            context="npm publish",
        )

    def test_create_status_custom_context(self, mock_pygithub):
        """create_status passes a custom context through."""
        mock_commit = MagicMock()
        mock_pygithub["repo"].get_commit.return_value = mock_commit

        api = CommitStatusAPI(token="test-token", repository="owner/repo")
        api.create_status("abc123", "success", "done", "https://example.com/", context="publish/canary")

        assert mock_commit.create_status.call_args.kwargs["context"] == "publish/canary"

    def test_create_status_failure_propagates(self, mock_pygithub):
        """create_status propagates GithubException."""
        mock_commit = MagicMock()
        mock_commit.create_status.side_effect = GithubException(422, {"message": "Validation Failed"}, None)
        mock_pygithub["repo"].get_commit.return_value = mock_commit

        api = CommitStatusAPI(token="test-token", repository="owner/repo")

        with pytest.raises(GithubException):
            api.create_status("abc123", "error", "Failed", "https://example.com/")


class TestStatusText:
    """Tests for status_description() and status_url()."""

    @pytest.mark.parametrize(
        "state, expected",
        [
            ("pending", "Publishing pkg@1.0.0"),
            ("success", "npm install pkg@1.0.0"),
            ("error", "Failed to publish pkg@1.0.0"),
            ("failure", "Failed to publish pkg@1.0.0"),
        ],
    )
    def test_status_description(self, state, expected):
        """status_description describes each state."""
        assert status_description(state, "pkg@1.0.0") == expected

    def test_status_url_scoped_package(self):
        """status_url links to unpkg for scoped packages too."""
        assert status_url("@scope/pkg@1.0.0") == "https://unpkg.com/@scope/pkg@1.0.0/"
