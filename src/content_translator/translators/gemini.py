# SPDX-License-Identifier: Apache-2.0
"""Google Gemini translation backend (generateContent)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from content_translator.core.models import TranslationResult
from content_translator.translators.base import (
    AuthScheme,
    ErrorCode,
    TranslationError,
    UsageTranslator,
)
from content_translator.translators.http import HTTPTranslator, provider_endpoint
from content_translator.translators.languages import ALL_LANGUAGES
from content_translator.translators.pricing import estimate_usage
from content_translator.translators.prompts import output_token_cap, single_prompt

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiTranslator(UsageTranslator, HTTPTranslator):
    """Gemini translation backend.

    The model name is part of the URL and the key travels as the ``key``
    query parameter unless another placement is configured.
    """

    NAME = "gemini"
    DISPLAY_NAME = "Gemini"
    LANGUAGES = ALL_LANGUAGES
    DEFAULT_AUTH = AuthScheme.query("key")

    DEFAULT_MODEL = "gemini-1.5-flash"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        auth: AuthScheme | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(
            api_key=api_key,
            enabled_languages=enabled_languages,
            auth=auth,
            timeout=timeout,
        )
        self._model = model or self.DEFAULT_MODEL
        self._endpoint = provider_endpoint(
            base_url, DEFAULT_BASE_URL, f"/models/{self._model}:generateContent"
        )

    @property
    def model(self) -> str:
        return self._model

    async def _translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        data = await self._request_json(
            "POST",
            self._endpoint,
            json={
                "contents": [{"parts": [{"text": single_prompt(text, source_lang, target_lang)}]}],
                "generationConfig": {
                    "temperature": 0.3,
                    "maxOutputTokens": output_token_cap(text, factor=3, ceiling=8192),
                },
            },
        )
        translated = self._extract_text(data)

        metadata = data.get("usageMetadata") or {}
        input_tokens = int(metadata.get("promptTokenCount", 0))
        output_tokens = int(metadata.get("candidatesTokenCount", 0))
        usage = estimate_usage(
            self.name,
            self._model,
            input_tokens,
            output_tokens,
            int(metadata.get("totalTokenCount", input_tokens + output_tokens)),
        )
        return TranslationResult(translated_text=translated.strip(), usage=usage)

    def _extract_text(self, data: Any) -> str:
        """Pull the first candidate's text out of a generateContent reply.

        Raises:
            TranslationError: CONTENT_BLOCKED when the prompt or candidate was
                blocked, NO_RESULT when there is no usable text.
        """
        if not isinstance(data, dict):
            raise TranslationError(
                "Gemini returned an unexpected response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise TranslationError(
                f"Gemini blocked the prompt: {block_reason}",
                code=ErrorCode.CONTENT_BLOCKED,
                provider=self.name,
            )

        candidates = data.get("candidates") or []
        if not candidates:
            raise TranslationError(
                "Gemini returned no candidates",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = parts[0].get("text") if parts else None
        if not text:
            if candidate.get("finishReason") == "SAFETY":
                raise TranslationError(
                    "Gemini stopped for safety reasons",
                    code=ErrorCode.CONTENT_BLOCKED,
                    provider=self.name,
                )
            raise TranslationError(
                "Invalid translation response format",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        return text
