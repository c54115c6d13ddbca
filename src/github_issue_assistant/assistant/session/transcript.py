"""In-memory conversation state for one interactive run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Role = Literal["system", "user", "assistant"]

SYSTEM_PROMPT = "You are a helpful assistant that helps people write GitHub issues."


@dataclass(frozen=True, slots=True)
class Message:
    role: Role
    content: str

    def to_json(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class Transcript:
    """Append-only, role-tagged message history."""

    def __init__(self, system_prompt: str | None = SYSTEM_PROMPT) -> None:
        self._messages: list[Message] = []
        if system_prompt:
            self._messages.append(Message(role="system", content=system_prompt))

    def append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def as_messages(self) -> list[dict[str, str]]:
        return [m.to_json() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)


@dataclass(slots=True)
class SessionState:
    """State owned by one session; discarded when the session ends."""

    default_repository: str | None = None
    transcript: Transcript = field(default_factory=Transcript)
