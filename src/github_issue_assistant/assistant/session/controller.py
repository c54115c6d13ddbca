"""Interactive issue session.

The session consumes one input event at a time through :meth:`IssueSession.handle`
and exposes the prompt for the next one, so the same controller can sit behind a
blocking console loop or a request-driven handler.

Flow (one unified path for manually entered and auto-detected issues)::

    IDLE --"create issue"--> MANUAL_TYPE -> MANUAL_TITLE -> MANUAL_DESCRIPTION -> MANUAL_LABELS --+
    IDLE --issue-worthy text--> REVIEW_TITLE -> REVIEW_DESCRIPTION -> REVIEW_LABELS -------------+
                                                                                                  |
      +-------------------------------------------------------------------------------------------+
      v
    [OFFER_IMPROVEMENT -> ACCEPT_IMPROVEMENT] -> [REPOSITORY] -> CONFIRM -> IDLE

Bracketed steps are skipped when no improver is configured or a default
repository is set. `cancel` at any prompt returns to IDLE without publishing.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from github_issue_assistant.assistant.errors import AssistantError, InputFormatError
from github_issue_assistant.assistant.github.publisher import IssuePublisher, parse_repository
from github_issue_assistant.assistant.issues.analyzer import IssueAnalyzer
from github_issue_assistant.assistant.issues.improver import IssueImprover
from github_issue_assistant.assistant.issues.models import (
    IssueDraft,
    IssueImprovement,
    IssueType,
    normalize_labels,
)
from github_issue_assistant.assistant.session.state_machine import SessionStep, transition
from github_issue_assistant.assistant.session.transcript import SessionState
from github_issue_assistant.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  help                                 Show this message
  create issue                         Enter an issue step by step
  set default repo to <owner>/<repo>   Skip the repository prompt from now on
  exit | quit                          Leave the assistant

Anything else is sent to the assistant. When it describes a concrete bug,
feature or task you will be offered a pre-filled issue to review.
Type 'cancel' at any issue prompt to abandon the draft."""

NO_ISSUE_FALLBACK = (
    "I didn't detect a specific issue to create. "
    "Try describing a bug, feature request, or task more specifically!"
)

_SET_DEFAULT_REPO = re.compile(
    r"^set\s+default\s+repo(?:sitory)?\s+to\s+(\S+)\s*$", flags=re.IGNORECASE
)
_EXIT_COMMANDS = {"exit", "quit"}
_YES = {"y", "yes"}
_NO = {"n", "no"}
_TYPE_CHOICES = "/".join(t.value for t in IssueType)


@dataclass(slots=True)
class SessionReply:
    """What to show after one input, and what to ask next."""

    messages: list[str] = field(default_factory=list)
    prompt: str = "> "
    finished: bool = False


@dataclass(slots=True)
class PendingIssue:
    """The draft being collected or reviewed in the current turn."""

    draft: IssueDraft
    origin: Literal["manual", "analysis"]
    repository: str | None = None
    improvement: IssueImprovement | None = None


def _yes_no(text: str, *, default: bool | None = None) -> bool | None:
    answer = text.strip().lower()
    if answer in _YES:
        return True
    if answer in _NO:
        return False
    if not answer:
        return default
    return None


class IssueSession:
    """Drive analysis, review, confirmation and publishing for one user."""

    def __init__(
        self,
        *,
        llm: LLMProvider,
        analyzer: IssueAnalyzer,
        publisher: IssuePublisher,
        improver: IssueImprover | None = None,
        state: SessionState | None = None,
    ) -> None:
        self.state = state or SessionState()
        self._llm = llm
        self._analyzer = analyzer
        self._publisher = publisher
        self._improver = improver

        self._step = SessionStep.IDLE
        self._pending: PendingIssue | None = None

        self._handlers: dict[SessionStep, Callable[[str, list[str]], None]] = {
            SessionStep.MANUAL_TYPE: self._on_manual_type,
            SessionStep.MANUAL_TITLE: self._on_manual_title,
            SessionStep.MANUAL_DESCRIPTION: self._on_manual_description,
            SessionStep.MANUAL_LABELS: self._on_manual_labels,
            SessionStep.REVIEW_TITLE: self._on_review_title,
            SessionStep.REVIEW_DESCRIPTION: self._on_review_description,
            SessionStep.REVIEW_LABELS: self._on_review_labels,
            SessionStep.OFFER_IMPROVEMENT: self._on_offer_improvement,
            SessionStep.ACCEPT_IMPROVEMENT: self._on_accept_improvement,
            SessionStep.REPOSITORY: self._on_repository,
            SessionStep.CONFIRM: self._on_confirm,
        }

    @property
    def step(self) -> SessionStep:
        return self._step

    @property
    def draft(self) -> IssueDraft | None:
        return self._pending.draft if self._pending is not None else None

    @property
    def prompt(self) -> str:
        step = self._step
        draft = self.draft
        if step is SessionStep.MANUAL_TYPE:
            return f"Issue type ({_TYPE_CHOICES}) [general]: "
        if step is SessionStep.MANUAL_TITLE:
            return "Title: "
        if step is SessionStep.MANUAL_DESCRIPTION:
            return "Description: "
        if step is SessionStep.MANUAL_LABELS:
            return "Labels (comma-separated, optional): "
        if step is SessionStep.REVIEW_TITLE:
            return "Title (Enter to keep): "
        if step is SessionStep.REVIEW_DESCRIPTION:
            return "Description (Enter to keep): "
        if step is SessionStep.REVIEW_LABELS and draft is not None:
            return f"Labels [{', '.join(draft.labels)}] (Enter to keep): "
        if step is SessionStep.OFFER_IMPROVEMENT:
            return "Improve this issue with AI? (y/N): "
        if step is SessionStep.ACCEPT_IMPROVEMENT:
            return "Accept improvements? (y/N): "
        if step is SessionStep.REPOSITORY:
            return "Repository (owner/repo): "
        if step is SessionStep.CONFIRM:
            return "Create this issue? (y/n): "
        return "> "

    def reset(self) -> None:
        """Drop any in-progress draft and return to IDLE."""

        self._pending = None
        self._step = SessionStep.IDLE

    def handle(self, text: str) -> SessionReply:
        """Process one input to completion. Expected failures never escape."""

        out: list[str] = []
        finished = False
        try:
            finished = self._dispatch(text.strip(), out)
        except AssistantError as e:
            logger.warning(
                "Turn failed", extra={"step": self._step.value, "error": str(e)}
            )
            out.append(f"Error: {e}")
            self.reset()
        return SessionReply(messages=out, prompt=self.prompt, finished=finished)

    def _dispatch(self, text: str, out: list[str]) -> bool:
        if self._step is SessionStep.IDLE:
            return self._on_idle(text, out)

        if text.lower() == "cancel":
            out.append("Issue creation cancelled.")
            self.reset()
            return False

        self._handlers[self._step](text, out)
        return False

    def _move(self, to: SessionStep) -> None:
        self._step = transition(current=self._step, to=to)

    def _require_pending(self) -> PendingIssue:
        if self._pending is None:
            raise AssistantError("No issue is being drafted")
        return self._pending

    def _update_draft(self, **changes: object) -> None:
        pending = self._require_pending()
        pending.draft = pending.draft.with_changes(**changes)

    # IDLE

    def _on_idle(self, text: str, out: list[str]) -> bool:
        if not text:
            return False

        command = text.lower()
        if command in _EXIT_COMMANDS:
            out.append("Goodbye!")
            return True

        if command == "help":
            out.append(HELP_TEXT)
            return False

        match = _SET_DEFAULT_REPO.match(text)
        if match:
            owner, repo = parse_repository(match.group(1))
            self.state.default_repository = f"{owner}/{repo}"
            out.append(f"Default repository set to {self.state.default_repository}")
            logger.info("Default repository set", extra={"repo": self.state.default_repository})
            return False

        if command == "create issue":
            self._pending = PendingIssue(draft=IssueDraft(), origin="manual")
            self._move(SessionStep.MANUAL_TYPE)
            out.append("Let's create an issue. Type 'cancel' at any prompt to stop.")
            return False

        self._converse(text, out)
        return False

    def _converse(self, text: str, out: list[str]) -> None:
        transcript = self.state.transcript
        transcript.append("user", text)

        analysis = self._analyzer.analyze(text)
        if analysis.should_create_issue:
            draft = analysis.to_draft()
            self._pending = PendingIssue(draft=draft, origin="analysis")
            transcript.append("assistant", f"Suggested a {draft.type.value} issue: {draft.title}")

            out.append(f"This looks like a {draft.type.value} issue worth tracking.")
            if draft.reasoning:
                out.append(f"Reasoning: {draft.reasoning}")
            out.append("Review the suggestion below; press Enter to keep a value.")
            out.append(f"Suggested title: {draft.title}")
            self._move(SessionStep.REVIEW_TITLE)
            return

        reply = self._llm.chat(transcript.as_messages())
        transcript.append("assistant", reply)
        out.append(reply.strip() or NO_ISSUE_FALLBACK)

    # MANUAL_COLLECTION

    def _on_manual_type(self, text: str, out: list[str]) -> None:
        if not text:
            issue_type = IssueType.GENERAL
        else:
            issue_type = IssueType.parse(text)
            if issue_type.value != text.lower():
                out.append(f"Unknown issue type {text!r}. Choose one of: {_TYPE_CHOICES}")
                return
        self._update_draft(type=issue_type)
        self._move(SessionStep.MANUAL_TITLE)

    def _on_manual_title(self, text: str, out: list[str]) -> None:
        if not text:
            out.append("A title is required.")
            return
        self._update_draft(title=text)
        self._move(SessionStep.MANUAL_DESCRIPTION)

    def _on_manual_description(self, text: str, out: list[str]) -> None:
        if not text:
            out.append("A description is required.")
            return
        self._update_draft(description=text)
        self._move(SessionStep.MANUAL_LABELS)

    def _on_manual_labels(self, text: str, out: list[str]) -> None:
        self._update_draft(labels=normalize_labels(text))
        self._after_editing(out)

    # REVIEW_AND_EDIT

    def _on_review_title(self, text: str, out: list[str]) -> None:
        if text:
            self._update_draft(title=text)
        self._move(SessionStep.REVIEW_DESCRIPTION)
        out.append("Suggested description:")
        out.append(self._require_pending().draft.description or "(empty)")

    def _on_review_description(self, text: str, out: list[str]) -> None:
        if text:
            self._update_draft(description=text)
        self._move(SessionStep.REVIEW_LABELS)

    def _on_review_labels(self, text: str, out: list[str]) -> None:
        if text:
            self._update_draft(labels=normalize_labels(text))
        self._after_editing(out)

    # Shared tail

    def _after_editing(self, out: list[str]) -> None:
        if self._improver is not None:
            self._move(SessionStep.OFFER_IMPROVEMENT)
            return
        self._to_publish_target(out)

    def _on_offer_improvement(self, text: str, out: list[str]) -> None:
        answer = _yes_no(text, default=False)
        if answer is None:
            out.append("Please answer y or n.")
            return
        if not answer or self._improver is None:
            self._to_publish_target(out)
            return

        pending = self._require_pending()
        improvement = self._improver.improve(pending.draft)
        if improvement is None:
            out.append("Could not improve the issue; keeping your draft.")
            self._to_publish_target(out)
            return

        pending.improvement = improvement
        out.append("AI suggests these improvements:")
        out.append(f"Title: {improvement.improved_title}")
        out.append("Description:")
        out.append(improvement.improved_description)
        out.append(f"Labels: {', '.join(improvement.suggested_labels) or '(none)'}")
        if improvement.changes:
            out.append(f"Changes: {improvement.changes}")
        self._move(SessionStep.ACCEPT_IMPROVEMENT)

    def _on_accept_improvement(self, text: str, out: list[str]) -> None:
        answer = _yes_no(text, default=False)
        if answer is None:
            out.append("Please answer y or n.")
            return

        pending = self._require_pending()
        if answer and pending.improvement is not None:
            pending.draft = pending.improvement.apply_to(pending.draft)
            out.append("Improvements applied.")
        else:
            out.append("Keeping your draft.")
        pending.improvement = None
        self._to_publish_target(out)

    def _to_publish_target(self, out: list[str]) -> None:
        default_repo = self.state.default_repository
        if default_repo:
            self._require_pending().repository = default_repo
            self._to_confirm(out)
            return
        self._move(SessionStep.REPOSITORY)

    def _on_repository(self, text: str, out: list[str]) -> None:
        try:
            owner, repo = parse_repository(text)
        except InputFormatError as e:
            out.append(str(e))
            return
        self._require_pending().repository = f"{owner}/{repo}"
        self._to_confirm(out)

    def _to_confirm(self, out: list[str]) -> None:
        pending = self._require_pending()
        self._move(SessionStep.CONFIRM)
        out.append("Issue summary:")
        out.append(f"Repository:  {pending.repository}")
        out.extend(pending.draft.summary_lines())

    def _on_confirm(self, text: str, out: list[str]) -> None:
        answer = _yes_no(text)
        if answer is None:
            out.append("Please answer y or n.")
            return
        if not answer:
            out.append("Issue creation cancelled.")
            self.reset()
            return

        pending = self._require_pending()
        result = self._publisher.publish_draft(
            repository=pending.repository or "", draft=pending.draft
        )
        if result.success:
            message = f"Issue created successfully: #{result.issue_number} {result.issue_url}"
        else:
            message = f"Failed to create issue: {result.error}"
        self.state.transcript.append("assistant", message)
        out.append(message)
        self.reset()
