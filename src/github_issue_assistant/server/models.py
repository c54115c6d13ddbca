"""Pydantic models for the REST server.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(_ApiModel):
    message: str


class AnalyzeResponse(_ApiModel):
    should_create_issue: bool
    type: str
    title: str
    description: str
    labels: list[str]
    reasoning: str


class IssueData(_ApiModel):
    title: str = ""
    description: str = ""
    type: str = "general"
    labels: list[str] = Field(default_factory=list)


class ImproveRequest(_ApiModel):
    issue_data: IssueData


class ImprovementResponse(_ApiModel):
    improved_title: str
    improved_description: str
    suggested_labels: list[str]
    changes: str


class CreateIssueRequest(_ApiModel):
    owner: str = ""
    repo: str = ""
    title: str
    body: str = ""
    labels: list[str] = Field(default_factory=list)


class PublishResponse(_ApiModel):
    success: bool
    issue_url: str | None = None
    issue_number: int | None = None
    error: str | None = None
