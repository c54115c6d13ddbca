"""LLM package initialization."""

from github_issue_assistant.llm.openai_provider import OpenAIProvider
from github_issue_assistant.llm.provider import LLMProvider

__all__ = [
    "LLMProvider",
    "OpenAIProvider",
]
