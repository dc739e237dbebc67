# SPDX-License-Identifier: Apache-2.0
"""Chat completions through LiteLLM for the translation backends."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


@dataclass
class LLMConfig:
    """Which model LiteLLM routes translation prompts to.

    Attributes:
        provider: LiteLLM provider prefix, e.g. "gemini" or "anthropic".
        model: Model id without the prefix; None picks the provider default.
        api_key: API key (optional, falls back to the provider's env var).
        api_base: Custom endpoint for self-hosted or proxied models.
        timeout: Request timeout in seconds; None keeps LiteLLM's default.
    """

    provider: str = "gemini"
    model: str | None = None
    api_key: str | None = None
    api_base: str | None = None
    timeout: float | None = None

    PROVIDER_DEFAULTS: ClassVar[dict[str, str]] = {
        "gemini": "gemini-1.5-flash",
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-5-sonnet-20241022",
    }

    API_KEY_ENV_VARS: ClassVar[dict[str, str]] = {
        "gemini": "GEMINI_API_KEY",
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
    }

    @property
    def effective_model(self) -> str:
        """Configured model, or the provider default."""
        if self.model is not None:
            return self.model
        return self.PROVIDER_DEFAULTS.get(self.provider, "gemini-1.5-flash")

    @property
    def litellm_model(self) -> str:
        """Model id in LiteLLM's "provider/model" form."""
        return f"{self.provider}/{self.effective_model}"

    def get_api_key_env_var(self) -> str:
        """Name of the variable LiteLLM reads the provider key from."""
        default = f"{self.provider.upper()}_API_KEY"
        return self.API_KEY_ENV_VARS.get(self.provider, default)

    @property
    def effective_api_key(self) -> str | None:
        """Explicit key, or the one found in the provider's env var."""
        return self.api_key or os.environ.get(self.get_api_key_env_var())


@dataclass(frozen=True)
class LLMResponse:
    """Generated text with token accounting."""

    text: str
    input_tokens: int = 0
    output_tokens: int = 0
    cost: float = 0.0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMClient:
    """Single-turn chat completion against any LiteLLM-routed model."""

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def config(self) -> LLMConfig:
        return self._config

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send one system/user exchange and return the reply.

        Args:
            prompt: User message (the text to translate).
            system: System message with the translation instructions.
            temperature: Sampling temperature.
            max_tokens: Output token cap.

        Returns:
            Generated text with token counts and LiteLLM's cost estimate.

        Raises:
            Exception: On LLM API errors (LiteLLM exceptions are OpenAI
                exception subclasses).
        """
        from litellm import acompletion

        messages = [{"role": "system", "content": system}] if system else []
        messages += [{"role": "user", "content": prompt}]

        kwargs: dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base
        if self._config.timeout is not None:
            kwargs["timeout"] = self._config.timeout
        api_key = self._config.effective_api_key
        if api_key:
            kwargs["api_key"] = api_key

        response = await acompletion(
            model=self._config.litellm_model,
            messages=messages,
            **kwargs,
        )

        content: str = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        return LLMResponse(
            text=content,
            input_tokens=int(getattr(usage, "prompt_tokens", 0) or 0),
            output_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
            cost=self._response_cost(response),
        )

    def _response_cost(self, response: Any) -> float:
        from litellm import completion_cost

        try:
            return float(completion_cost(completion_response=response))
        except Exception as e:
            # Models missing from LiteLLM's price map
            logger.debug("No cost data for %s: %s", self._config.litellm_model, e)
            return 0.0
