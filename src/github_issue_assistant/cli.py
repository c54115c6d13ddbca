"""Module entrypoint so `python -m github_issue_assistant.cli` works.

The CLI itself is implemented in `github_issue_assistant.assistant.main`.
"""

from __future__ import annotations

from github_issue_assistant.assistant.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
