"""Configuration for the web server.

The server is "local-first": it starts and serves the page even if no GitHub
token is configured. Endpoints that need the token degrade to their safe
results at request time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_BUNDLED_STATIC_DIR = Path(__file__).parent / "static"


class ServerSettings(BaseSettings):
    """Settings for the REST API + chat page.

    Notes:
        - Unlike :class:`github_issue_assistant.assistant.config.AssistantSettings`,
          this does NOT require a GitHub token at startup.
    """

    github_token: str = Field(default="", validation_alias="GITHUB_TOKEN")
    github_base_url: str = Field(
        default="https://api.github.com", validation_alias="GITHUB_BASE_URL"
    )

    models_endpoint: str = Field(
        default="https://models.github.ai/inference", validation_alias="GITHUB_MODELS_ENDPOINT"
    )
    model_name: str = Field(default="openai/gpt-4o-mini", validation_alias="GITHUB_MODELS_MODEL")
    temperature: float = Field(default=1.0, ge=0.0, le=2.0, validation_alias="LLM_TEMPERATURE")
    top_p: float = Field(default=1.0, gt=0.0, le=1.0, validation_alias="LLM_TOP_P")
    max_tokens: int = Field(default=1000, gt=0, validation_alias="LLM_MAX_TOKENS")
    request_timeout_seconds: float = Field(
        default=60.0, gt=0, validation_alias="LLM_TIMEOUT_SECONDS"
    )

    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=3000, gt=0, lt=65536, validation_alias="PORT")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Where the chat page lives. Defaults to the copy bundled with the package.
    static_dir: Path = Field(default=_BUNDLED_STATIC_DIR, validation_alias="STATIC_DIR")

    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        validation_alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
