# SPDX-License-Identifier: Apache-2.0
"""LibreTranslate backend."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar

from content_translator.translators.base import (
    ArrayLengthMismatchError,
    AuthScheme,
    Capability,
    ErrorCode,
    TranslationError,
)
from content_translator.translators.http import HTTPTranslator
from content_translator.translators.languages import COMMON_LANGUAGES


class LibreTranslateTranslator(HTTPTranslator):
    """LibreTranslate backend for the public or a self-hosted instance.

    The key is optional and travels in the JSON body as ``api_key``. A list
    ``q`` comes back as a list ``translatedText``, which gives native batching.
    """

    NAME = "libretranslate"
    DISPLAY_NAME = "LibreTranslate"
    LANGUAGES = COMMON_LANGUAGES
    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.NATIVE_BATCH})
    DEFAULT_AUTH = AuthScheme()
    REQUIRES_API_KEY = False

    DEFAULT_API_URL = "https://libretranslate.com/translate"

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, timeout=timeout)
        self._api_url = api_url or self.DEFAULT_API_URL

    async def _request(self, query: str | list[str], source_lang: str, target_lang: str) -> Any:
        body: dict[str, Any] = {
            "q": query,
            "source": source_lang,
            "target": target_lang,
            "format": "text",
        }
        if self._api_key:
            body["api_key"] = self._api_key

        data = await self._request_json("POST", self._api_url, json=body)
        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not translated:
            raise TranslationError(
                "LibreTranslate returned no result",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        return translated

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        translated = await self._request(text, source_lang, target_lang)
        if not isinstance(translated, str):
            raise TranslationError(
                "LibreTranslate returned an unexpected response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        return translated

    async def native_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate several texts in one request.

        Raises:
            ArrayLengthMismatchError: If the reply has a different item count.
        """
        self.check_ready(source_lang, target_lang)
        if not texts:
            return []
        translated = await self._request(list(texts), source_lang, target_lang)
        if isinstance(translated, str):
            translated = [translated]
        if len(translated) != len(texts):
            raise ArrayLengthMismatchError(len(texts), len(translated), provider=self.name)
        return [str(item) for item in translated]
