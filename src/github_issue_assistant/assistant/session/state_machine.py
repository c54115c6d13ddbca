from __future__ import annotations

from enum import Enum


class SessionStep(str, Enum):
    IDLE = "idle"
    MANUAL_TYPE = "manual_type"
    MANUAL_TITLE = "manual_title"
    MANUAL_DESCRIPTION = "manual_description"
    MANUAL_LABELS = "manual_labels"
    REVIEW_TITLE = "review_title"
    REVIEW_DESCRIPTION = "review_description"
    REVIEW_LABELS = "review_labels"
    OFFER_IMPROVEMENT = "offer_improvement"
    ACCEPT_IMPROVEMENT = "accept_improvement"
    REPOSITORY = "repository"
    CONFIRM = "confirm"


_FORWARD_TRANSITIONS: dict[SessionStep, set[SessionStep]] = {
    SessionStep.IDLE: {SessionStep.MANUAL_TYPE, SessionStep.REVIEW_TITLE},
    SessionStep.MANUAL_TYPE: {SessionStep.MANUAL_TITLE},
    SessionStep.MANUAL_TITLE: {SessionStep.MANUAL_DESCRIPTION},
    SessionStep.MANUAL_DESCRIPTION: {SessionStep.MANUAL_LABELS},
    SessionStep.MANUAL_LABELS: {
        SessionStep.OFFER_IMPROVEMENT,
        SessionStep.REPOSITORY,
        SessionStep.CONFIRM,
    },
    SessionStep.REVIEW_TITLE: {SessionStep.REVIEW_DESCRIPTION},
    SessionStep.REVIEW_DESCRIPTION: {SessionStep.REVIEW_LABELS},
    SessionStep.REVIEW_LABELS: {
        SessionStep.OFFER_IMPROVEMENT,
        SessionStep.REPOSITORY,
        SessionStep.CONFIRM,
    },
    SessionStep.OFFER_IMPROVEMENT: {
        SessionStep.ACCEPT_IMPROVEMENT,
        SessionStep.REPOSITORY,
        SessionStep.CONFIRM,
    },
    SessionStep.ACCEPT_IMPROVEMENT: {SessionStep.REPOSITORY, SessionStep.CONFIRM},
    SessionStep.REPOSITORY: {SessionStep.CONFIRM},
    SessionStep.CONFIRM: set(),
}

# Every step can return to IDLE (finished, cancelled, or failed turn).
ALLOWED_TRANSITIONS: dict[SessionStep, set[SessionStep]] = {
    step: targets | {SessionStep.IDLE} for step, targets in _FORWARD_TRANSITIONS.items()
}


class IllegalTransitionError(ValueError):
    pass


def transition(*, current: SessionStep, to: SessionStep) -> SessionStep:
    allowed = ALLOWED_TRANSITIONS.get(current, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
    return to
