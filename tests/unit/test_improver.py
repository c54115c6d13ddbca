"""Unit tests for the optional issue improvement (mocked completion client)."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from github_issue_assistant.assistant.errors import ImprovementError, UpstreamError
from github_issue_assistant.assistant.issues.improver import IssueImprover
from github_issue_assistant.assistant.issues.models import IssueDraft


@pytest.fixture
def draft() -> IssueDraft:
    return IssueDraft(
        type="bug",
        title="login broken",
        description="cant login on safari",
        labels=["bug"],
    )


def test_improve_parses_suggestion(llm: Mock, draft: IssueDraft) -> None:
    llm.chat.return_value = "```json\n" + json.dumps(
        {
            "improvedTitle": "Login fails on Safari 17",
            "improvedDescription": "## Steps\n1. Open Safari\n2. Click Sign in",
            "suggestedLabels": ["bug", "safari"],
            "changes": "Added reproduction steps",
        }
    ) + "\n```"

    improvement = IssueImprover(llm=llm).improve(draft)

    assert improvement is not None
    assert improvement.improved_title == "Login fails on Safari 17"
    assert improvement.suggested_labels == ["bug", "safari"]
    assert improvement.changes == "Added reproduction steps"

    prompt = llm.chat.call_args.args[0][1]["content"]
    assert '"title": "login broken"' in prompt
    assert '"type": "bug"' in prompt


@pytest.mark.parametrize(
    "failure",
    [
        {"side_effect": UpstreamError("timeout")},
        {"side_effect": RuntimeError("connection reset")},
        {"return_value": "I think the title is fine."},
        {"return_value": '{"improvedTitle": "only a title"}'},
    ],
)
def test_failed_improvement_leaves_draft_unchanged(
    llm: Mock, draft: IssueDraft, failure: dict[str, object]
) -> None:
    llm.chat.configure_mock(**failure)
    before = draft.model_dump()

    improvement = IssueImprover(llm=llm).improve(draft)

    assert improvement is None
    assert draft.model_dump() == before


def test_request_improvement_raises_improvement_error(llm: Mock, draft: IssueDraft) -> None:
    llm.chat.side_effect = UpstreamError("boom")

    with pytest.raises(ImprovementError):
        IssueImprover(llm=llm).request_improvement(draft)


def test_request_improvement_wraps_unexpected_client_errors(llm: Mock, draft: IssueDraft) -> None:
    llm.chat.side_effect = RuntimeError("connection reset")

    with pytest.raises(ImprovementError, match="connection reset"):
        IssueImprover(llm=llm).request_improvement(draft)
