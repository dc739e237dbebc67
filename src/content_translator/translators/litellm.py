# SPDX-License-Identifier: Apache-2.0
"""Translation backend routed through LiteLLM."""

from __future__ import annotations

from collections.abc import Iterable

from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAIError

from content_translator.core.models import TranslationResult, Usage
from content_translator.llm.client import LLMClient, LLMConfig
from content_translator.translators.base import (
    AuthType,
    AuthScheme,
    ErrorCode,
    TranslationError,
    TranslatorError,
    UsageTranslator,
)
from content_translator.translators.languages import ALL_LANGUAGES
from content_translator.translators.pricing import CURRENCY
from content_translator.translators.prompts import output_token_cap, system_prompt


class LiteLLMTranslator(UsageTranslator):
    """Any LiteLLM-supported model as a translation backend.

    The key may come from the configuration or from the provider's usual
    environment variable (``GEMINI_API_KEY``, ``ANTHROPIC_API_KEY``...).
    """

    NAME = "litellm"
    DISPLAY_NAME = "LiteLLM"
    LANGUAGES = ALL_LANGUAGES
    DEFAULT_AUTH = AuthScheme(AuthType.NONE)

    def __init__(
        self,
        llm_config: LLMConfig | None = None,
        enabled_languages: Iterable[str] | None = None,
        client: LLMClient | None = None,
    ) -> None:
        self._llm_config = llm_config or LLMConfig()
        super().__init__(
            api_key=self._llm_config.effective_api_key,
            enabled_languages=enabled_languages,
        )
        self._client = client or LLMClient(self._llm_config)

    @property
    def model(self) -> str:
        return self._llm_config.litellm_model

    async def _translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        try:
            response = await self._client.generate(
                text,
                system=system_prompt(source_lang, target_lang),
                temperature=0.3,
                max_tokens=output_token_cap(text),
            )
        except OpenAIError as e:
            raise self._convert_error(e) from e

        if not response.text.strip():
            raise TranslationError(
                "LiteLLM returned empty response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        usage = Usage(
            input_units=response.input_tokens,
            output_units=response.output_tokens,
            total_units=response.total_tokens,
            estimated_cost=response.cost,
            currency=CURRENCY,
        )
        return TranslationResult(translated_text=response.text.strip(), usage=usage)

    def _convert_error(self, error: OpenAIError) -> TranslatorError:
        # LiteLLM raises OpenAI exception subclasses for every provider.
        from litellm.exceptions import (
            ContentPolicyViolationError,
            ContextWindowExceededError,
        )

        if isinstance(error, ContextWindowExceededError):
            return self.classified_error(str(error), ErrorCode.CONTENT_TOO_LONG.value)
        if isinstance(error, ContentPolicyViolationError):
            return self.classified_error(str(error), ErrorCode.CONTENT_BLOCKED.value)
        if isinstance(error, APITimeoutError):
            return self.classified_error(str(error), ErrorCode.TIMEOUT.value)
        if isinstance(error, APIConnectionError):
            return self.classified_error(str(error), ErrorCode.NETWORK_ERROR.value)
        if isinstance(error, APIStatusError):
            return self.classified_error(error.message, str(error.status_code))
        return self.classified_error(str(error))
