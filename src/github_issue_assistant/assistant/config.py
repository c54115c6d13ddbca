"""Configuration for the issue assistant.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

A single GitHub token authenticates both the GitHub Models completion endpoint
and the GitHub REST API.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantSettings(BaseSettings):
    """Settings for the interactive assistant and one-shot CLI commands.

    Environment variables:
    - GITHUB_TOKEN
    - GITHUB_BASE_URL          (optional)
    - GITHUB_MODELS_ENDPOINT   (optional)
    - GITHUB_MODELS_MODEL      (optional)
    - LLM_TEMPERATURE / LLM_TOP_P / LLM_MAX_TOKENS / LLM_TIMEOUT_SECONDS (optional)
    - DEFAULT_REPO             (optional)
    - LOG_LEVEL                (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AssistantSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="GitHub token used for the models endpoint and the REST API",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    models_endpoint: str = Field(
        default="https://models.github.ai/inference",
        validation_alias="GITHUB_MODELS_ENDPOINT",
        description="OpenAI-compatible chat completion endpoint",
    )
    model_name: str = Field(
        default="openai/gpt-4o-mini",
        validation_alias="GITHUB_MODELS_MODEL",
        description="Model identifier sent with every completion request",
    )
    temperature: float = Field(
        default=1.0,
        ge=0.0,
        le=2.0,
        validation_alias="LLM_TEMPERATURE",
    )
    top_p: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        validation_alias="LLM_TOP_P",
    )
    max_tokens: int = Field(
        default=1000,
        gt=0,
        validation_alias="LLM_MAX_TOKENS",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias="LLM_TIMEOUT_SECONDS",
        description="Per-request timeout for completion calls",
    )

    default_repo: str = Field(
        default="",
        validation_alias="DEFAULT_REPO",
        description="Repository ('owner/repo') used when the session has no default set",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> AssistantSettings:
        if not self.github_token.strip():
            raise ValueError("GITHUB_TOKEN is required")
        return self
