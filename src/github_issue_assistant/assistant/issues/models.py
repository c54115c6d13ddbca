"""Issue data model shared by the analyzer, improver, publisher and session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class IssueType(str, Enum):
    BUG = "bug"
    FEATURE = "feature"
    TASK = "task"
    DOCUMENTATION = "documentation"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: object) -> IssueType:
        """Normalise free-form model/user text to a known type (unknown -> general)."""

        if isinstance(value, IssueType):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return cls.GENERAL


def normalize_labels(value: object) -> list[str]:
    """Accept a list or a comma-separated string; keep order, drop blanks and duplicates."""

    if value is None:
        return []
    if isinstance(value, str):
        parts: list[object] = list(value.split(","))
    elif isinstance(value, (list, tuple, set)):
        parts = list(value)
    else:
        parts = [value]

    labels: list[str] = []
    for part in parts:
        label = str(part).strip()
        if label and label not in labels:
            labels.append(label)
    return labels


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IssueDraft(BaseModel):
    """An issue as it will be sent to GitHub.

    Drafts are immutable; user edits and accepted improvements produce copies
    via :meth:`with_changes`.
    """

    model_config = ConfigDict(frozen=True)

    type: IssueType = IssueType.GENERAL
    title: str = ""
    description: str = ""
    labels: list[str] = Field(default_factory=list)
    reasoning: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> IssueType:
        return IssueType.parse(value)

    @field_validator("labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: object) -> list[str]:
        return normalize_labels(value)

    def with_changes(self, **changes: Any) -> IssueDraft:
        # model_copy skips validation; round-trip through the validators instead.
        return IssueDraft.model_validate({**self.model_dump(), **changes})

    def summary_lines(self) -> list[str]:
        labels = ", ".join(self.labels) if self.labels else "(none)"
        return [
            f"Type:        {self.type.value}",
            f"Title:       {self.title}",
            f"Labels:      {labels}",
            "Description:",
            self.description or "(empty)",
        ]


class IssueAnalysis(_CamelModel):
    """Parsed reply of the issue-intent analysis.

    `error` is set only on the safe-default branch and never leaves the process.
    """

    should_create_issue: bool = False
    type: IssueType = IssueType.GENERAL
    title: str = ""
    description: str = ""
    labels: list[str] = Field(default_factory=list)
    reasoning: str = ""

    error: str | None = Field(default=None, exclude=True)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> IssueType:
        return IssueType.parse(value)

    @field_validator("labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: object) -> list[str]:
        return normalize_labels(value)

    @field_validator("title", "description", "reasoning", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return "" if value is None else str(value)

    @classmethod
    def safe_default(cls, error: str) -> IssueAnalysis:
        return cls(should_create_issue=False, reasoning="", error=error)

    def to_draft(self) -> IssueDraft:
        return IssueDraft(
            type=self.type,
            title=self.title,
            description=self.description,
            labels=self.labels,
            reasoning=self.reasoning,
        )


class IssueImprovement(_CamelModel):
    """Suggested rewrite of a draft. Only applied when the user accepts it."""

    improved_title: str
    improved_description: str
    suggested_labels: list[str] = Field(default_factory=list)
    changes: str = ""

    @field_validator("suggested_labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: object) -> list[str]:
        return normalize_labels(value)

    @field_validator("changes", mode="before")
    @classmethod
    def _coerce_changes(cls, value: object) -> str:
        return "" if value is None else str(value)

    def apply_to(self, draft: IssueDraft) -> IssueDraft:
        return draft.with_changes(
            title=self.improved_title or draft.title,
            description=self.improved_description or draft.description,
            labels=self.suggested_labels or draft.labels,
        )


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Outcome of one publish attempt. Callers branch on `success`."""

    success: bool
    issue_url: str | None = None
    issue_number: int | None = None
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> PublishResult:
        return cls(success=False, error=error)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"success": self.success}
        if self.issue_url is not None:
            out["issueUrl"] = self.issue_url
        if self.issue_number is not None:
            out["issueNumber"] = self.issue_number
        if self.error is not None:
            out["error"] = self.error
        return out
