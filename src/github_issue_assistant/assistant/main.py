"""CLI entrypoint for the issue assistant."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from github_issue_assistant import __version__
from github_issue_assistant.assistant.config import AssistantSettings
from github_issue_assistant.assistant.errors import InputFormatError
from github_issue_assistant.assistant.github.publisher import IssuePublisher, parse_repository
from github_issue_assistant.assistant.issues.analyzer import IssueAnalyzer
from github_issue_assistant.assistant.issues.improver import IssueImprover
from github_issue_assistant.assistant.issues.models import normalize_labels
from github_issue_assistant.assistant.logging import configure_logging
from github_issue_assistant.assistant.session.console import run_console
from github_issue_assistant.assistant.session.controller import IssueSession
from github_issue_assistant.assistant.session.transcript import SessionState
from github_issue_assistant.llm.openai_provider import OpenAIProvider
from github_issue_assistant.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-assistant",
        description="Chat with a model and turn concrete requests into GitHub issues",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-issue-assistant {__version__}"
    )
    parser.add_argument(
        "--log-format",
        choices=("json", "text"),
        default="json",
        help="Format of log records written to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    chat = subparsers.add_parser("chat", help="Start an interactive session")
    chat.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Default repository in the form 'owner/repo' (overrides DEFAULT_REPO)",
    )
    chat.add_argument(
        "--no-improve",
        action="store_true",
        help="Do not offer AI improvement of drafts before publishing",
    )

    analyze = subparsers.add_parser(
        "analyze", help="Analyse one message and print the result as JSON"
    )
    analyze.add_argument("message", help="Text to analyse")

    create_issue = subparsers.add_parser("create-issue", help="Create a GitHub issue")
    create_issue.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        required=True,
        help="Target repository in the form 'owner/repo'",
    )
    create_issue.add_argument("--title", required=True, help="Issue title")
    create_issue.add_argument("--body", default="", help="Issue body (markdown)")
    create_issue.add_argument(
        "--labels",
        default="",
        help="Comma-separated labels, e.g. 'bug,ui'",
    )

    serve = subparsers.add_parser("serve", help="Run the web chat and REST API")
    serve.add_argument("--host", default=None, help="Bind address (overrides HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (overrides PORT)")

    return parser


def build_llm(settings: AssistantSettings) -> LLMProvider:
    return OpenAIProvider(
        api_key=settings.github_token,
        model=settings.model_name,
        base_url=settings.models_endpoint,
        temperature=settings.temperature,
        top_p=settings.top_p,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout_seconds,
    )


def build_session(
    settings: AssistantSettings,
    *,
    default_repository: str | None = None,
    offer_improvement: bool = True,
    llm: LLMProvider | None = None,
) -> IssueSession:
    llm = llm or build_llm(settings)
    repository = (default_repository or settings.default_repo).strip()
    if repository:
        owner, repo = parse_repository(repository)
        repository = f"{owner}/{repo}"

    return IssueSession(
        llm=llm,
        analyzer=IssueAnalyzer(llm=llm),
        improver=IssueImprover(llm=llm) if offer_improvement else None,
        publisher=IssuePublisher(token=settings.github_token, base_url=settings.github_base_url),
        state=SessionState(default_repository=repository or None),
    )


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from github_issue_assistant.server.app import create_app
    from github_issue_assistant.server.config import ServerSettings

    try:
        settings = ServerSettings()
    except ValidationError as e:
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, fmt=args.log_format)
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Starting web server", extra={"host": host, "port": port})
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # The web server does not require a token at startup.
    if args.command == "serve":
        return _serve(args)

    try:
        settings = AssistantSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, fmt=args.log_format)

    try:
        if args.command == "chat":
            try:
                session = build_session(
                    settings,
                    default_repository=args.repository,
                    offer_improvement=not args.no_improve,
                )
            except InputFormatError as e:
                print(str(e), file=sys.stderr)
                return 2
            return run_console(session)

        if args.command == "analyze":
            analysis = IssueAnalyzer(llm=build_llm(settings)).analyze(args.message)
            print(json.dumps(analysis.model_dump(mode="json", by_alias=True), indent=2))
            if analysis.error:
                print(f"Analysis failed: {analysis.error}", file=sys.stderr)
                return 1
            return 0

        if args.command == "create-issue":
            publisher = IssuePublisher(
                token=settings.github_token, base_url=settings.github_base_url
            )
            try:
                owner, repo = parse_repository(args.repository)
            except InputFormatError as e:
                print(str(e), file=sys.stderr)
                return 2

            result = publisher.publish(
                owner=owner,
                repo=repo,
                title=args.title,
                body=args.body,
                labels=normalize_labels(args.labels),
            )
            if not result.success:
                print(f"Failed to create issue: {result.error}", file=sys.stderr)
                return 1
            print(f"Created issue #{result.issue_number}: {result.issue_url}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
