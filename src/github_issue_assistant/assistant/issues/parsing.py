"""Helpers for reading JSON objects out of model replies.

Models are asked for a bare JSON object but often wrap it in a markdown code
fence (```json ... ``` or plain ``` ... ```). The fence is removed before parsing.
"""

from __future__ import annotations

import json
import re
from typing import Any

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\r?\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Return `text` trimmed, without a surrounding markdown code fence."""

    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped

    stripped = _OPENING_FENCE.sub("", stripped, count=1)
    stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a model reply that must contain exactly one JSON object.

    Raises:
        ValueError: If the reply is not valid JSON or not an object.
    """

    payload = strip_code_fences(text)
    if not payload:
        raise ValueError("Empty model reply")

    data = json.loads(payload)  # json.JSONDecodeError is a ValueError
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
