from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import Mock

from fastapi.testclient import TestClient

from github_issue_assistant.assistant.github.publisher import IssuePublisher
from github_issue_assistant.server.app import create_app
from github_issue_assistant.server.config import ServerSettings


def _settings(monkeypatch, **env: str) -> ServerSettings:
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return ServerSettings()


def test_health_and_page(monkeypatch) -> None:
    client = TestClient(create_app(_settings(monkeypatch)))

    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert health["llmConfigured"] is False

    page = client.get("/")
    assert page.status_code == 200
    assert "issue-form" in page.text

    assert client.get("/static/app.js").status_code == 200
    assert client.get("/api/unknown").status_code == 404


def test_missing_page_serves_instructions(monkeypatch, tmp_path: Path) -> None:
    settings = _settings(monkeypatch, STATIC_DIR=str(tmp_path / "nowhere"))
    client = TestClient(create_app(settings))

    resp = client.get("/")
    assert resp.status_code == 200
    assert "Chat page not found" in resp.text


def test_analyze_returns_camel_case_analysis(monkeypatch, llm: Mock, bug_analysis_reply: str) -> None:
    llm.chat.return_value = bug_analysis_reply
    client = TestClient(create_app(_settings(monkeypatch), llm=llm))

    resp = client.post("/api/analyze", json={"message": "Login is broken on Safari"})

    assert resp.status_code == 200
    assert resp.json() == {
        "shouldCreateIssue": True,
        "type": "bug",
        "title": "Login fails on Safari",
        "description": "Clicking **Sign in** on Safari 17 does nothing.",
        "labels": ["bug"],
        "reasoning": "Specific browser and failing action.",
    }


def test_analyze_failure_is_safe_default(monkeypatch, llm: Mock) -> None:
    llm.chat.return_value = "not json at all"
    client = TestClient(create_app(_settings(monkeypatch), llm=llm))

    body = client.post("/api/analyze", json={"message": "Login is broken"}).json()

    assert body["shouldCreateIssue"] is False
    assert "error" not in body


def test_analyze_without_token_is_safe_default(monkeypatch) -> None:
    client = TestClient(create_app(_settings(monkeypatch)))

    body = client.post("/api/analyze", json={"message": "Login is broken"}).json()

    assert body["shouldCreateIssue"] is False


def test_improve_returns_suggestion_or_null(monkeypatch, llm: Mock) -> None:
    llm.chat.side_effect = [
        json.dumps(
            {
                "improvedTitle": "Login fails on Safari 17",
                "improvedDescription": "## Steps",
                "suggestedLabels": ["bug"],
                "changes": "Added steps",
            }
        ),
        "cannot help",
    ]
    client = TestClient(create_app(_settings(monkeypatch), llm=llm))
    payload = {
        "issueData": {
            "title": "login broken",
            "description": "safari",
            "type": "bug",
            "labels": ["bug"],
        }
    }

    first = client.post("/api/improve", json=payload)
    second = client.post("/api/improve", json=payload)

    assert first.json() == {
        "improvedTitle": "Login fails on Safari 17",
        "improvedDescription": "## Steps",
        "suggestedLabels": ["bug"],
        "changes": "Added steps",
    }
    assert second.status_code == 200
    assert second.json() is None


def test_create_issue_success(monkeypatch, client_factory: Mock, github_client: Mock) -> None:
    publisher = IssuePublisher(token="test-token", client_factory=client_factory)
    client = TestClient(create_app(_settings(monkeypatch), publisher=publisher))

    resp = client.post(
        "/api/create-issue",
        json={
            "owner": "acme",
            "repo": "widgets",
            "title": "Login fails on Safari",
            "body": "Body",
            "labels": ["bug"],
        },
    )

    assert resp.json() == {
        "success": True,
        "issueUrl": "https://github.com/acme/widgets/issues/7",
        "issueNumber": 7,
        "error": None,
    }
    github_client.create_issue.assert_called_once_with(
        title="Login fails on Safari", body="Body", labels=["bug"]
    )


def test_create_issue_without_token(monkeypatch) -> None:
    client = TestClient(create_app(_settings(monkeypatch)))

    body = client.post(
        "/api/create-issue", json={"owner": "acme", "repo": "widgets", "title": "T"}
    ).json()

    assert body["success"] is False
    assert body["error"] == "GitHub token not configured. Please set GITHUB_TOKEN in .env file."


def test_create_issue_network_error(monkeypatch, client_factory: Mock, github_client: Mock) -> None:
    github_client.create_issue.side_effect = ConnectionError("Network is unreachable")
    publisher = IssuePublisher(token="test-token", client_factory=client_factory)
    client = TestClient(create_app(_settings(monkeypatch), publisher=publisher))

    body = client.post(
        "/api/create-issue", json={"owner": "acme", "repo": "widgets", "title": "T"}
    ).json()

    assert body["success"] is False
    assert body["error"] == "Network is unreachable"


def test_analyze_and_improve_survive_client_exceptions(monkeypatch, llm: Mock) -> None:
    llm.chat.side_effect = RuntimeError("connection reset")
    client = TestClient(create_app(_settings(monkeypatch), llm=llm), raise_server_exceptions=False)

    analyzed = client.post("/api/analyze", json={"message": "Login is broken"})
    improved = client.post(
        "/api/improve",
        json={"issueData": {"title": "login broken", "description": "safari", "type": "bug"}},
    )

    assert analyzed.status_code == 200
    assert analyzed.json()["shouldCreateIssue"] is False
    assert improved.status_code == 200
    assert improved.json() is None
