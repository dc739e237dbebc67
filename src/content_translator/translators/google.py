# SPDX-License-Identifier: Apache-2.0
"""Google Cloud Translation (v2) backend."""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar

from content_translator.translators.base import (
    ArrayLengthMismatchError,
    AuthScheme,
    Capability,
    ErrorCode,
    TranslationError,
)
from content_translator.translators.google_free import google_language_code
from content_translator.translators.http import HTTPTranslator
from content_translator.translators.languages import ALL_LANGUAGES


class GoogleTranslator(HTTPTranslator):
    """Google Cloud Translation backend.

    Requires an API key. Accepts a list of texts in one request, so it
    supports native batching.
    """

    NAME = "google"
    DISPLAY_NAME = "Google Cloud Translation"
    LANGUAGES = ALL_LANGUAGES
    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.NATIVE_BATCH})
    DEFAULT_AUTH = AuthScheme.header("X-Goog-Api-Key")

    DEFAULT_API_URL = "https://translation.googleapis.com/language/translate/v2"

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, timeout=timeout)
        self._api_url = api_url or self.DEFAULT_API_URL

    async def _request(
        self, query: str | list[str], source_lang: str, target_lang: str
    ) -> list[str]:
        data = await self._request_json(
            "POST",
            self._api_url,
            json={
                "q": query,
                "source": google_language_code(source_lang),
                "target": google_language_code(target_lang),
                "format": "text",
            },
        )
        try:
            return [item["translatedText"] for item in data["data"]["translations"]]
        except (KeyError, TypeError) as e:
            raise TranslationError(
                "Google Cloud Translation returned an unexpected response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            ) from e

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        translations = await self._request(text, source_lang, target_lang)
        if not translations:
            raise TranslationError(
                "Google Cloud Translation returned no result",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        return translations[0]

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
        translations = await self._request(list(texts), source_lang, target_lang)
        if len(translations) != len(texts):
            raise ArrayLengthMismatchError(len(texts), len(translations), provider=self.name)
        return translations
