"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the analyzer, improver and publisher.
Each request is independent: the browser page owns the draft and the transcript.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from github_issue_assistant import __version__
from github_issue_assistant.assistant.github.publisher import IssuePublisher
from github_issue_assistant.assistant.issues.analyzer import IssueAnalyzer
from github_issue_assistant.assistant.issues.improver import IssueImprover
from github_issue_assistant.assistant.issues.models import IssueAnalysis, IssueDraft
from github_issue_assistant.llm.openai_provider import OpenAIProvider
from github_issue_assistant.llm.provider import LLMProvider
from github_issue_assistant.server.config import ServerSettings
from github_issue_assistant.server.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    CreateIssueRequest,
    ImprovementResponse,
    ImproveRequest,
    PublishResponse,
)

logger = logging.getLogger(__name__)

MISSING_TOKEN_ANALYSIS_ERROR = "GITHUB_TOKEN is not configured"


def _build_llm(settings: ServerSettings) -> LLMProvider | None:
    if not settings.github_token.strip():
        return None
    return OpenAIProvider(
        api_key=settings.github_token,
        model=settings.model_name,
        base_url=settings.models_endpoint,
        temperature=settings.temperature,
        top_p=settings.top_p,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout_seconds,
    )


def create_app(
    settings: ServerSettings | None = None,
    *,
    llm: LLMProvider | None = None,
    publisher: IssuePublisher | None = None,
) -> FastAPI:
    settings = settings or ServerSettings()

    app = FastAPI(
        title="GitHub Issue Assistant",
        version=__version__,
        description="Chat with a model and turn concrete requests into GitHub issues.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Expose settings for request handlers that want to read it.
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    llm = llm or _build_llm(settings)
    analyzer = IssueAnalyzer(llm=llm) if llm is not None else None
    improver = IssueImprover(llm=llm) if llm is not None else None
    publisher = publisher or IssuePublisher(
        token=settings.github_token, base_url=settings.github_base_url
    )

    @app.get("/api/health")
    def health() -> dict[str, object]:
        return {
            "status": "ok",
            "version": __version__,
            "llmConfigured": llm is not None,
        }

    @app.post("/api/analyze", response_model=AnalyzeResponse)
    def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
        logger.info("Analyzing message", extra={"length": len(req.message)})
        if analyzer is None:
            analysis = IssueAnalysis.safe_default(MISSING_TOKEN_ANALYSIS_ERROR)
        else:
            analysis = analyzer.analyze(req.message)
        return AnalyzeResponse.model_validate(analysis.model_dump(mode="json"))

    @app.post("/api/improve", response_model=ImprovementResponse | None)
    def improve(req: ImproveRequest) -> ImprovementResponse | None:
        if improver is None:
            return None
        draft = IssueDraft.model_validate(req.issue_data.model_dump())
        improvement = improver.improve(draft)
        if improvement is None:
            return None
        return ImprovementResponse.model_validate(improvement.model_dump(mode="json"))

    @app.post("/api/create-issue", response_model=PublishResponse)
    def create_issue(req: CreateIssueRequest) -> PublishResponse:
        logger.info(
            "Creating issue", extra={"owner": req.owner, "repo": req.repo, "title": req.title}
        )
        result = publisher.publish(
            owner=req.owner,
            repo=req.repo,
            title=req.title,
            body=req.body,
            labels=req.labels,
        )
        return PublishResponse.model_validate(result.to_json())

    _mount_page(app, Path(settings.static_dir))
    return app


def _mount_page(app: FastAPI, static_dir: Path) -> None:
    """Serve the chat page at `/` and its assets under `/static`."""

    index = static_dir / "index.html"

    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/", include_in_schema=False, response_model=None)
    def page_index() -> FileResponse | PlainTextResponse:
        if index.exists():
            return FileResponse(index)
        return PlainTextResponse(
            f"Chat page not found in {static_dir}. The API is available under /api.\n",
            status_code=200,
        )

    @app.get("/{full_path:path}", include_in_schema=False, response_model=None)
    def page_fallback(full_path: str) -> FileResponse:
        # Don't steal API routes.
        if full_path.startswith("api/") or full_path == "api":
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = static_dir / full_path
        if candidate.is_file() and candidate.resolve().is_relative_to(static_dir.resolve()):
            return FileResponse(candidate)
        raise HTTPException(status_code=404, detail="Not Found")
