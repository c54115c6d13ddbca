"""OpenAI-compatible LLM provider (GitHub Models by default)."""

import logging
from typing import Any

from openai import OpenAI, OpenAIError

from github_issue_assistant.assistant.errors import UpstreamError
from github_issue_assistant.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Chat completions through the `openai` SDK against a configurable endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str | None = None,
        temperature: float = 1.0,
        top_p: float = 1.0,
        max_tokens: int = 1000,
        timeout: float | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Bearer token for the completion endpoint.
            model: Model identifier sent with every request.
            base_url: Endpoint base URL; None uses the SDK default.
            temperature: Default sampling temperature.
            top_p: Default nucleus-sampling probability.
            max_tokens: Default output token cap.
            timeout: Per-request timeout in seconds.
            client: Pre-built client (tests).

        Raises:
            ValueError: If the API key is not provided.
        """
        if not api_key:
            raise ValueError("API key is required")

        self.client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

        logger.info("LLM provider initialized", extra={"model": model, "base_url": base_url})

    def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
        top_p: float | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.
            top_p: Nucleus-sampling probability.
            **kwargs: Additional OpenAI-specific parameters.

        Returns:
            Text content of the first choice.

        Raises:
            UpstreamError: If the call fails or returns no choices.
        """
        logger.debug(f"Generating chat completion with {len(messages)} messages")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,  # type: ignore
                max_tokens=max_tokens if max_tokens is not None else self.max_tokens,
                temperature=temperature if temperature is not None else self.temperature,
                top_p=top_p if top_p is not None else self.top_p,
                **kwargs,
            )
        except OpenAIError as e:
            logger.warning("Completion request failed", extra={"error": str(e)})
            raise UpstreamError(f"Completion request failed: {e}") from e

        if not response.choices:
            raise UpstreamError("Completion returned no choices")

        content = response.choices[0].message.content or ""
        logger.debug(f"Generated {len(content)} characters")

        return content
