# SPDX-License-Identifier: Apache-2.0
"""Keyless Google Translate backend using deep-translator."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from deep_translator import GoogleTranslator as DeepGoogleTranslator  # type: ignore[import-untyped]
from deep_translator.exceptions import (  # type: ignore[import-untyped]
    RequestError,
    TooManyRequests,
    TranslationNotFound,
)

from content_translator.translators.base import (
    BaseTranslator,
    ErrorCode,
    TranslationError,
)
from content_translator.translators.languages import GOOGLE_FREE_LANGUAGES

# Codes the public web endpoint spells differently.
LANGUAGE_CODES = {"zh": "zh-CN", "he": "iw"}


def google_language_code(lang_code: str) -> str:
    return LANGUAGE_CODES.get(lang_code, lang_code)


class GoogleFreeTranslator(BaseTranslator):
    """Google Translate backend.

    This backend uses Google Translate via deep-translator library.
    No API key is required (uses free web API).
    """

    NAME = "google-free"
    DISPLAY_NAME = "Google Translate (free)"
    LANGUAGES = GOOGLE_FREE_LANGUAGES
    REQUIRES_API_KEY = False

    def __init__(
        self,
        enabled_languages: Iterable[str] | None = None,
        max_concurrent: int = 5,
    ) -> None:
        """Initialize GoogleFreeTranslator.

        Args:
            enabled_languages: Languages enabled in settings.
            max_concurrent: Maximum concurrent translation requests.
        """
        super().__init__(enabled_languages=enabled_languages)
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        async with self._semaphore:
            return await asyncio.to_thread(
                self._translate_sync, text, source_lang, target_lang
            )

    def _translate_sync(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Synchronous translation implementation.

        Raises:
            TranslationError: On translation failure.
        """
        try:
            translator = DeepGoogleTranslator(
                source=google_language_code(source_lang),
                target=google_language_code(target_lang),
            )
            result = translator.translate(text)
        except TooManyRequests as e:
            raise TranslationError(
                f"Google Translate rate limit: {e}",
                code=ErrorCode.RATE_LIMITED,
                provider=self.name,
            ) from e
        except TranslationNotFound as e:
            raise TranslationError(
                f"Google Translate returned no result: {e}",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            ) from e
        except RequestError as e:
            raise TranslationError(
                f"Google Translate request failed: {e}",
                code=ErrorCode.NETWORK_ERROR,
                provider=self.name,
            ) from e
        except Exception as e:
            raise self.classified_error(str(e)) from e

        if not result:
            raise TranslationError(
                "Google Translate returned no result",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            )
        return result
