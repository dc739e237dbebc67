# SPDX-License-Identifier: Apache-2.0
"""Anthropic Claude translation backend (Messages API)."""

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
from content_translator.translators.prompts import output_token_cap, system_prompt

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
API_VERSION = "2023-06-01"


class ClaudeTranslator(UsageTranslator, HTTPTranslator):
    """Claude translation backend.

    Talks to the Messages API directly over aiohttp and reports token usage.
    """

    NAME = "claude"
    DISPLAY_NAME = "Claude"
    LANGUAGES = ALL_LANGUAGES
    DEFAULT_AUTH = AuthScheme.header("x-api-key")

    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"

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
        self._endpoint = provider_endpoint(base_url, DEFAULT_BASE_URL, "/messages")

    @property
    def model(self) -> str:
        return self._model

    async def _translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        data = await self._request_json(
            "POST",
            self._endpoint,
            headers={"anthropic-version": API_VERSION},
            json={
                "model": self._model,
                "max_tokens": output_token_cap(text),
                "system": system_prompt(source_lang, target_lang),
                "messages": [{"role": "user", "content": text}],
                "temperature": 0.3,
            },
        )

        translated = _first_text_block(data)
        if not translated:
            raise TranslationError(
                "Claude returned no text content",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )

        usage_data = data.get("usage") or {}
        usage = estimate_usage(
            self.name,
            self._model,
            int(usage_data.get("input_tokens", 0)),
            int(usage_data.get("output_tokens", 0)),
        )
        return TranslationResult(translated_text=translated.strip(), usage=usage)


def _first_text_block(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    for block in data.get("content") or []:
        if isinstance(block, dict) and block.get("type", "text") == "text":
            return block.get("text")
    return None
