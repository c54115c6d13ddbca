"""Error taxonomy for the issue assistant.

Every error below is caught where it is used and turned into a user-visible
message or a safe default; none of them should end an interactive session.
"""

from __future__ import annotations


class AssistantError(Exception):
    """Base class for expected, recoverable failures."""


class UpstreamError(AssistantError):
    """The completion call failed or returned no usable choice."""


class AnalysisError(AssistantError):
    """The issue-intent reply could not be obtained or parsed."""


class ImprovementError(AssistantError):
    """The issue-improvement reply could not be obtained or parsed."""


class PublishError(AssistantError):
    """The issue-hosting API rejected or failed the create call."""


class InputFormatError(AssistantError, ValueError):
    """User input did not match the expected shape (e.g. 'owner/repo')."""
