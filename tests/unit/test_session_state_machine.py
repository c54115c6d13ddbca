from __future__ import annotations

import pytest

from github_issue_assistant.assistant.session.state_machine import (
    ALLOWED_TRANSITIONS,
    IllegalTransitionError,
    SessionStep,
    transition,
)
from github_issue_assistant.assistant.session.transcript import Transcript


def test_every_step_can_return_to_idle() -> None:
    for step in SessionStep:
        assert SessionStep.IDLE in ALLOWED_TRANSITIONS[step]


def test_idle_only_enters_collection_or_review() -> None:
    assert ALLOWED_TRANSITIONS[SessionStep.IDLE] == {
        SessionStep.IDLE,
        SessionStep.MANUAL_TYPE,
        SessionStep.REVIEW_TITLE,
    }


def test_confirmation_is_required_before_leaving_the_flow() -> None:
    for step, targets in ALLOWED_TRANSITIONS.items():
        if step is SessionStep.CONFIRM:
            assert targets == {SessionStep.IDLE}


def test_illegal_transition_raises() -> None:
    with pytest.raises(IllegalTransitionError):
        transition(current=SessionStep.IDLE, to=SessionStep.CONFIRM)
    with pytest.raises(IllegalTransitionError):
        transition(current=SessionStep.REVIEW_TITLE, to=SessionStep.REPOSITORY)


def test_legal_transition_returns_target() -> None:
    assert (
        transition(current=SessionStep.REPOSITORY, to=SessionStep.CONFIRM) is SessionStep.CONFIRM
    )


def test_transcript_is_append_only_and_seeded() -> None:
    transcript = Transcript()
    transcript.append("user", "hello")
    transcript.append("assistant", "hi")

    assert [m["role"] for m in transcript.as_messages()] == ["system", "user", "assistant"]
    assert isinstance(transcript.messages, tuple)


def test_transcript_without_system_prompt() -> None:
    assert len(Transcript(system_prompt=None)) == 0
