"""Interactive session: transcript, state machine and console loop."""

from github_issue_assistant.assistant.session.console import run_console
from github_issue_assistant.assistant.session.controller import IssueSession, SessionReply
from github_issue_assistant.assistant.session.state_machine import (
    ALLOWED_TRANSITIONS,
    IllegalTransitionError,
    SessionStep,
    transition,
)
from github_issue_assistant.assistant.session.transcript import Message, SessionState, Transcript

__all__ = [
    "ALLOWED_TRANSITIONS",
    "IllegalTransitionError",
    "IssueSession",
    "Message",
    "SessionReply",
    "SessionState",
    "SessionStep",
    "Transcript",
    "run_console",
    "transition",
]
