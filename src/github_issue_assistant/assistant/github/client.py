"""GitHub API client wrapper.

This intentionally wraps PyGithub to keep GitHub calls out of session code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Auth, Github, GithubException
from github.Repository import Repository

from github_issue_assistant.assistant.errors import PublishError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """Minimal issue metadata returned from GitHub."""

    repository: str
    number: int
    title: str
    url: str


class GitHubClient:
    """Small wrapper around PyGithub scoped to one repository."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url.rstrip("/"))

        try:
            self._repo = self._github.get_repo(self._repository_name)
        except GithubException as e:
            raise PublishError(_describe(e)) from e
        logger.info(
            "Authenticated with GitHub and connected to repository",
            extra={"repo": self._repository_name},
        )

    def create_issue(
        self,
        *,
        title: str,
        body: str | None,
        labels: list[str] | None,
    ) -> CreatedIssue:
        if not title.strip():
            raise ValueError("Issue title is required")

        logger.info("Creating issue", extra={"repo": self._repository_name, "title": title})
        try:
            issue = self._repo.create_issue(title=title, body=body or "", labels=labels or [])
        except GithubException as e:
            raise PublishError(_describe(e)) from e

        logger.info("Issue created", extra={"issue_number": issue.number})
        return CreatedIssue(
            repository=self._repository_name,
            number=issue.number,
            title=issue.title,
            url=issue.html_url,
        )

    def close(self) -> None:
        """Close the underlying PyGithub connection, if any."""

        if self._github is not None:
            self._github.close()


def _describe(error: GithubException) -> str:
    data = error.data
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return f"GitHub API error {error.status}: {data['message']}"
    return f"GitHub API error {error.status}"
