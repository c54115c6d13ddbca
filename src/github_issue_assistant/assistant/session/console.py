"""Blocking read-eval loop around an :class:`IssueSession`."""

from __future__ import annotations

import logging
from collections.abc import Callable

from github_issue_assistant.assistant.session.controller import IssueSession

logger = logging.getLogger(__name__)

WELCOME = "GitHub Issue Assistant. Describe a bug, feature or task, or type 'help'."


def run_console(
    session: IssueSession,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Run until 'exit'/'quit', end of input, or Ctrl-C. Returns an exit code."""

    write(WELCOME)
    if session.state.default_repository:
        write(f"Default repository: {session.state.default_repository}")

    while True:
        try:
            text = read(session.prompt)
        except (EOFError, KeyboardInterrupt):
            write("")
            return 0

        try:
            reply = session.handle(text)
        except Exception:
            logger.exception("Unexpected error while handling input")
            session.reset()
            write("Something went wrong handling that input; please try again.")
            continue

        for message in reply.messages:
            write(message)
        if reply.finished:
            return 0
