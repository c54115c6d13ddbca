"""Issue publishing.

Wraps the single "create issue" call and normalises every outcome into a
:class:`PublishResult`; callers branch on `success`, never on exceptions.

There is no retry and no idempotency key: re-publishing after a transient
failure may create a duplicate issue.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from github_issue_assistant.assistant.errors import InputFormatError
from github_issue_assistant.assistant.github.client import GitHubClient
from github_issue_assistant.assistant.issues.models import IssueDraft, PublishResult

logger = logging.getLogger(__name__)

MISSING_TOKEN_ERROR = "GitHub token not configured. Please set GITHUB_TOKEN in .env file."

ClientFactory = Callable[..., GitHubClient]


def parse_repository(value: str) -> tuple[str, str]:
    """Split 'owner/repo' into its parts.

    Raises:
        InputFormatError: If the value is not exactly two non-empty '/'-separated parts.
    """

    text = value.strip().strip("/")
    if "/" not in text:
        raise InputFormatError("Repository must be in format: owner/repo-name")

    owner, _, repo = text.partition("/")
    owner, repo = owner.strip(), repo.strip()
    if not owner or not repo or "/" in repo:
        raise InputFormatError("Repository must be in format: owner/repo-name")
    return owner, repo


class IssuePublisher:
    """Create issues on GitHub with a single bearer token."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        client_factory: ClientFactory = GitHubClient,
    ) -> None:
        self._token = token
        self._base_url = base_url
        self._client_factory = client_factory

    def publish(
        self,
        *,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Sequence[str] = (),
    ) -> PublishResult:
        """Create one issue; never raises."""

        if not self._token.strip():
            return PublishResult.failed(MISSING_TOKEN_ERROR)
        if not owner.strip() or not repo.strip():
            return PublishResult.failed("Repository owner and name are required")

        repository = f"{owner.strip()}/{repo.strip()}"
        try:
            client = self._client_factory(
                token=self._token, repository=repository, base_url=self._base_url
            )
            try:
                created = client.create_issue(title=title, body=body, labels=list(labels))
            finally:
                client.close()
        except Exception as e:
            logger.exception("Issue creation failed", extra={"repo": repository})
            return PublishResult.failed(str(e) or type(e).__name__)

        logger.info(
            "Issue published",
            extra={"repo": repository, "issue_number": created.number, "url": created.url},
        )
        return PublishResult(success=True, issue_url=created.url, issue_number=created.number)

    def publish_draft(self, *, repository: str, draft: IssueDraft) -> PublishResult:
        """Publish a reviewed draft to 'owner/repo'; malformed repositories never reach GitHub."""

        try:
            owner, repo = parse_repository(repository)
        except InputFormatError as e:
            return PublishResult.failed(str(e))

        return self.publish(
            owner=owner,
            repo=repo,
            title=draft.title,
            body=draft.description,
            labels=draft.labels,
        )
