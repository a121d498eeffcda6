# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub commit status reporting for publishes.

References:
    - Commit statuses: https://docs.github.com/en/rest/commits/statuses
    - PyGithub Documentation: https://pygithub.readthedocs.io/
"""

from __future__ import annotations

import logging
import os

from github import Github

logger = logging.getLogger(__name__)

STATUS_CONTEXT = "npm publish"
UNPKG_URL = "https://unpkg.com/{spec}/"


class CommitStatusAPI:
    """Wrapper around PyGithub for posting commit statuses.

    Handles authentication via token input, defaulting to GITHUB_TOKEN
    environment variable if not provided.

    References:
        - GITHUB_TOKEN: https://docs.github.com/en/actions/security-for-github-actions/security-guides/automatic-token-authentication
    """

    def __init__(self, token: str | None = None, repository: str | None = None) -> None:
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication. Defaults to GITHUB_TOKEN env var.
            repository: Repository in 'owner/repo' format. Defaults to GITHUB_REPOSITORY env var.
        """
        self._token = token or os.environ.get("GITHUB_TOKEN", "")
        self._repository = repository or os.environ.get("GITHUB_REPOSITORY", "")

        if not self._token:
            raise ValueError("GitHub token is required. Set GITHUB_TOKEN or pass token parameter.")
        if not self._repository:
            raise ValueError("Repository is required. Set GITHUB_REPOSITORY or pass repository parameter.")

        self._github = Github(self._token)
        self._repo = self._github.get_repo(self._repository)

    def create_status(
        self,
        commit_sha: str,
        state: str,
        description: str,
        target_url: str,
        context: str = STATUS_CONTEXT,
    ) -> None:
        """Create a commit status.

        Args:
            commit_sha: SHA of the commit the status is attached to.
            state: One of 'pending', 'success', 'error' or 'failure'.
            description: Short description shown next to the status.
            target_url: Link attached to the status.
            context: Status context label (default: 'npm publish').

        Raises:
            GithubException: If the status cannot be created.

        References:
            - Create a commit status: https://docs.github.com/en/rest/commits/statuses#create-a-commit-status
        """
        logger.debug("Setting '%s' status on %s to %s", context, commit_sha[:7], state)
        self._repo.get_commit(commit_sha).create_status(
            state=state,
            target_url=target_url,
            description=description,
            context=context,
        )


def status_description(state: str, spec: str) -> str:
    """Return the status description for a publish state.

    Examples:
        >>> status_description("pending", "pkg@1.0.0")
        'Publishing pkg@1.0.0'
        >>> status_description("success", "pkg@1.0.0")
        'npm install pkg@1.0.0'
    """
    if state == "pending":
        return f"Publishing {spec}"
    if state == "success":
        return f"npm install {spec}"
    return f"Failed to publish {spec}"


def status_url(spec: str) -> str:
    """Return the unpkg URL for a package spec."""
    return UNPKG_URL.format(spec=spec)
