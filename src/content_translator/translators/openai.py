# SPDX-License-Identifier: Apache-2.0
"""OpenAI GPT translation backend."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Any, ClassVar

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    NotFoundError,
    OpenAIError,
)
from pydantic import BaseModel

from content_translator.core.models import TranslationResult
from content_translator.translators.base import (
    ArrayLengthMismatchError,
    AuthScheme,
    AuthType,
    Capability,
    ConfigurationError,
    ErrorCode,
    TranslationError,
    UsageTranslator,
)
from content_translator.translators.languages import ALL_LANGUAGES, english_name
from content_translator.translators.pricing import estimate_usage
from content_translator.translators.prompts import (
    batch_system_prompt,
    output_token_cap,
    system_prompt,
)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.3


class BatchTranslations(BaseModel):
    """Structured output schema for multi-text requests."""

    translations: list[str]


class OpenAITranslator(UsageTranslator):
    """OpenAI GPT translation backend.

    Single texts go through a plain chat completion; several texts go through
    Structured Outputs so the reply is a JSON array of the same length.
    Any OpenAI-compatible service can be used through ``base_url``.
    """

    NAME = "openai"
    DISPLAY_NAME = "OpenAI"
    LANGUAGES = ALL_LANGUAGES
    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.USAGE, Capability.NATIVE_BATCH}
    )
    DEFAULT_AUTH = AuthScheme.bearer()

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        auth: AuthScheme | None = None,
        system_prompt: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize OpenAITranslator.

        Args:
            api_key: OpenAI API key.
            model: Model to use. Priority: argument > OPENAI_MODEL env > default.
            base_url: Custom endpoint for OpenAI-compatible services.
            enabled_languages: Languages enabled in settings.
            auth: Credential placement for compatible services that do not
                take a bearer token.
            system_prompt: Custom system prompt; may use {source}/{target}.
            timeout: Request timeout in seconds.
        """
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, auth=auth)
        self._model = model or os.environ.get("OPENAI_MODEL") or self.DEFAULT_MODEL
        self._base_url = base_url
        self._system_prompt = system_prompt
        self._timeout = timeout
        self._client: AsyncOpenAI | None = None

    @property
    def model(self) -> str:
        return self._model

    def _ensure_client(self) -> AsyncOpenAI:
        """Ensure OpenAI client exists.

        Returns:
            Active OpenAI async client.
        """
        if self._client is None:
            kwargs: dict[str, Any] = {"api_key": self._api_key, "base_url": self._base_url}
            auth = self.descriptor.auth
            if auth.type is not AuthType.BEARER:
                headers: dict[str, str] = {}
                params: dict[str, str] = {}
                auth.apply(self._api_key, headers, params)
                kwargs["default_headers"] = headers or None
                kwargs["default_query"] = params or None
            if self._timeout:
                kwargs["timeout"] = self._timeout
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    async def _translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        client = self._ensure_client()
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "system",
                        "content": system_prompt(source_lang, target_lang, self._system_prompt),
                    },
                    {"role": "user", "content": text},
                ],
                temperature=TEMPERATURE,
                max_tokens=output_token_cap(text),
            )
        except OpenAIError as e:
            raise self._convert_error(e) from e

        if not response.choices or not response.choices[0].message.content:
            raise TranslationError(
                "OpenAI returned empty response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        translated = response.choices[0].message.content.strip()
        usage = None
        if response.usage is not None:
            usage = estimate_usage(
                self.name,
                self._model,
                response.usage.prompt_tokens,
                response.usage.completion_tokens,
                response.usage.total_tokens,
            )
        return TranslationResult(translated_text=translated, usage=usage)

    async def native_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate multiple texts in one request using Structured Outputs.

        Args:
            texts: List of texts to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            List of translated texts (same order and length as input).

        Raises:
            ArrayLengthMismatchError: If the array length differs from the input.
            TranslationError: On translation failure.
        """
        self.check_ready(source_lang, target_lang)
        if not texts:
            return []

        client = self._ensure_client()
        user_content = (
            f"Translate the following {len(texts)} text(s) from "
            f"{english_name(source_lang)} to {english_name(target_lang)}. "
            f"Return exactly {len(texts)} translations in the same order.\n\n"
            f"Texts to translate:\n"
        )
        for i, text in enumerate(texts, 1):
            user_content += f"{i}. {text}\n"

        logger.debug("OpenAI structured batch: %d texts, model=%s", len(texts), self._model)
        try:
            response = await client.chat.completions.parse(
                model=self._model,
                messages=[
                    {"role": "system", "content": batch_system_prompt(source_lang, target_lang)},
                    {"role": "user", "content": user_content},
                ],
                response_format=BatchTranslations,
                temperature=TEMPERATURE,
            )
        except OpenAIError as e:
            raise self._convert_error(e) from e

        result = response.choices[0].message.parsed if response.choices else None
        if result is None:
            raise TranslationError(
                "OpenAI returned empty response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        translations = result.translations
        if len(translations) != len(texts):
            raise ArrayLengthMismatchError(
                expected=len(texts),
                actual=len(translations),
                provider=self.name,
            )
        return translations

    def _convert_error(self, error: OpenAIError) -> Exception:
        """Map an OpenAI SDK exception onto the translator error types.

        An unknown model is a configuration problem; everything else is a
        classified runtime failure.
        """
        if isinstance(error, NotFoundError) or self._is_model_error(error):
            return ConfigurationError(
                f"Model '{self._model}' is not available. "
                f"Set OPENAI_MODEL environment variable to use a different model "
                f"(e.g., 'gpt-4o-mini', 'gpt-4o').",
                provider=self.name,
            )
        if isinstance(error, APITimeoutError):
            return self.classified_error(str(error), ErrorCode.TIMEOUT.value)
        if isinstance(error, APIConnectionError):
            return self.classified_error(str(error), ErrorCode.NETWORK_ERROR.value)
        if isinstance(error, APIStatusError):
            code = getattr(error, "code", None) or str(error.status_code)
            return self.classified_error(error.message, code)
        return self.classified_error(str(error))

    @staticmethod
    def _is_model_error(error: OpenAIError) -> bool:
        error_code = getattr(error, "code", None) or ""
        error_str = str(error).lower()
        return error_code in ("model_not_found", "invalid_model") or (
            "model" in error_str
            and (
                "does not exist" in error_str
                or "do not have access" in error_str
            )
        )

    async def close(self) -> None:
        """Close the OpenAI client."""
        if self._client:
            await self._client.close()
            self._client = None
