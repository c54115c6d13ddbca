"""GitHub Issue Assistant.

A small chat front-end over a hosted language model that:
- decides whether a message describes a bug, feature or task
- lets the user review and edit the suggested issue
- creates the issue on GitHub after explicit confirmation
"""

__version__ = "0.1.0"

from github_issue_assistant.assistant.config import AssistantSettings

__all__ = ["__version__", "AssistantSettings"]
