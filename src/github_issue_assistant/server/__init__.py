"""FastAPI server for the web variant of the issue assistant.

Design intent:
- Keep analysis/publishing logic in `github_issue_assistant.assistant.*`
- Keep server-specific concerns (routing, CORS, static page) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from github_issue_assistant.server.app import create_app
