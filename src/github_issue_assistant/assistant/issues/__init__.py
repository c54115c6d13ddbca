"""Issue drafting: data model, intent analysis and improvement."""

from github_issue_assistant.assistant.issues.analyzer import IssueAnalyzer
from github_issue_assistant.assistant.issues.improver import IssueImprover
from github_issue_assistant.assistant.issues.models import (
    IssueAnalysis,
    IssueDraft,
    IssueImprovement,
    IssueType,
    PublishResult,
)

__all__ = [
    "IssueAnalysis",
    "IssueAnalyzer",
    "IssueDraft",
    "IssueImprovement",
    "IssueImprover",
    "IssueType",
    "PublishResult",
]
