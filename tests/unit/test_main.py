"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

import github_issue_assistant.assistant.main as cli
from github_issue_assistant.assistant.errors import InputFormatError
from github_issue_assistant.assistant.issues.models import PublishResult


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_missing_token_is_a_configuration_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["analyze", "hello"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_analyze_prints_json(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    llm: Mock,
    bug_analysis_reply: str,
) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    llm.chat.return_value = bug_analysis_reply
    monkeypatch.setattr(cli, "build_llm", lambda _settings: llm)

    assert cli.main(["analyze", "Login is broken on Safari"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["shouldCreateIssue"] is True
    assert out["title"] == "Login fails on Safari"


def test_create_issue_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    publish = Mock(
        return_value=PublishResult(
            success=True, issue_url="https://github.com/acme/widgets/issues/7", issue_number=7
        )
    )
    monkeypatch.setattr(cli.IssuePublisher, "publish", publish)

    code = cli.main(
        ["create-issue", "--repo", "acme/widgets", "--title", "T", "--labels", "bug, ui"]
    )

    assert code == 0
    publish.assert_called_once_with(owner="acme", repo="widgets", title="T", body="", labels=["bug", "ui"])
    assert "Created issue #7" in capsys.readouterr().out


def test_create_issue_rejects_malformed_repository(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    publish = Mock()
    monkeypatch.setattr(cli.IssuePublisher, "publish", publish)

    assert cli.main(["create-issue", "--repo", "widgets", "--title", "T"]) == 2
    publish.assert_not_called()


def test_build_session_uses_default_repo(monkeypatch: pytest.MonkeyPatch, llm: Mock) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("DEFAULT_REPO", "acme/widgets")
    settings = cli.AssistantSettings()

    session = cli.build_session(settings, llm=llm)
    override = cli.build_session(settings, default_repository="octo/hello", llm=llm)

    assert session.state.default_repository == "acme/widgets"
    assert override.state.default_repository == "octo/hello"

    with pytest.raises(InputFormatError):
        cli.build_session(settings, default_repository="nope", llm=llm)


def test_chat_runs_console(monkeypatch: pytest.MonkeyPatch, llm: Mock) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.setattr(cli, "build_llm", lambda _settings: llm)
    run_console = Mock(return_value=0)
    monkeypatch.setattr(cli, "run_console", run_console)

    assert cli.main(["chat", "--repo", "acme/widgets", "--no-improve"]) == 0

    session = run_console.call_args.args[0]
    assert session.state.default_repository == "acme/widgets"
