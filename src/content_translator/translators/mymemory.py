# SPDX-License-Identifier: Apache-2.0
"""MyMemory translation backend."""

from __future__ import annotations

from collections.abc import Iterable

from content_translator.translators.base import (
    AuthScheme,
    ErrorCode,
    QuotaExceededError,
    TranslationError,
)
from content_translator.translators.google_free import google_language_code
from content_translator.translators.http import HTTPTranslator
from content_translator.translators.languages import COMMON_LANGUAGES

RATE_LIMIT_MARKER = "MYMEMORY WARNING"


class MyMemoryTranslator(HTTPTranslator):
    """MyMemory translation backend.

    Works without a key; a key and a contact email raise the daily quota.
    Quota exhaustion is reported inside a 200 reply, so the payload is
    inspected for the warning text.
    """

    NAME = "mymemory"
    DISPLAY_NAME = "MyMemory"
    LANGUAGES = COMMON_LANGUAGES
    DEFAULT_AUTH = AuthScheme.query("key")
    REQUIRES_API_KEY = False

    DEFAULT_API_URL = "https://api.mymemory.translated.net/get"
    DEFAULT_EMAIL = "user@example.com"

    def __init__(
        self,
        api_key: str | None = None,
        email: str | None = None,
        api_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, timeout=timeout)
        self._email = email or self.DEFAULT_EMAIL
        self._api_url = api_url or self.DEFAULT_API_URL

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        langpair = f"{google_language_code(source_lang)}|{google_language_code(target_lang)}"
        data = await self._request_json(
            "GET",
            self._api_url,
            params={"q": text, "langpair": langpair, "de": self._email},
            headers={"Accept": "application/json"},
        )

        status = data.get("responseStatus") if isinstance(data, dict) else None
        if str(status) != "200":
            details = data.get("responseDetails") if isinstance(data, dict) else None
            raise self.classified_error(str(details or "Translation failed"), str(status))

        translated = (data.get("responseData") or {}).get("translatedText")
        if not translated:
            raise TranslationError(
                "MyMemory returned no result",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        if RATE_LIMIT_MARKER in translated:
            raise QuotaExceededError(
                "Rate limit exceeded. Please try again later or provide an API key.",
                provider=self.name,
            )
        return translated
