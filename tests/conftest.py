"""Test configuration and fixtures."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from github_issue_assistant.assistant.github.client import CreatedIssue, GitHubClient
from github_issue_assistant.llm.provider import LLMProvider

_SETTINGS_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_BASE_URL",
    "GITHUB_MODELS_ENDPOINT",
    "GITHUB_MODELS_MODEL",
    "LLM_TEMPERATURE",
    "LLM_TOP_P",
    "LLM_MAX_TOKENS",
    "LLM_TIMEOUT_SECONDS",
    "DEFAULT_REPO",
    "LOG_LEVEL",
    "HOST",
    "PORT",
    "STATIC_DIR",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real .env and environment out of the tests."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def llm() -> Mock:
    """Provide a completion client that returns canned replies."""
    return Mock(spec=LLMProvider)


@pytest.fixture
def bug_analysis_reply() -> str:
    """Provide a fenced analysis reply describing a Safari login bug."""
    payload = {
        "shouldCreateIssue": True,
        "type": "bug",
        "title": "Login fails on Safari",
        "description": "Clicking **Sign in** on Safari 17 does nothing.",
        "labels": ["bug"],
        "reasoning": "Specific browser and failing action.",
    }
    return "```json\n" + json.dumps(payload, indent=2) + "\n```"


@pytest.fixture
def github_client() -> Mock:
    """Provide a GitHub client that creates issue #7 in acme/widgets."""
    client = Mock(spec=GitHubClient)
    client.create_issue.return_value = CreatedIssue(
        repository="acme/widgets",
        number=7,
        title="Login fails on Safari",
        url="https://github.com/acme/widgets/issues/7",
    )
    return client


@pytest.fixture
def client_factory(github_client: Mock) -> Mock:
    """Provide a GitHubClient factory returning the mocked client."""
    return Mock(return_value=github_client)
