# SPDX-License-Identifier: Apache-2.0
"""DeepL translation backend."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import ClassVar

from content_translator.translators.base import (
    ArrayLengthMismatchError,
    AuthScheme,
    Capability,
    ErrorCode,
    TranslationError,
)
from content_translator.translators.http import HTTPTranslator
from content_translator.translators.languages import DEEPL_LANGUAGES

logger = logging.getLogger(__name__)


class DeepLTranslator(HTTPTranslator):
    """DeepL v2 REST backend.

    Keys ending in ``:fx`` belong to the free plan and go to api-free; other
    keys go to the pro endpoint. Several fields travel in one request as
    repeated ``text`` form parameters.
    """

    NAME = "deepl"
    DISPLAY_NAME = "DeepL"
    LANGUAGES = DEEPL_LANGUAGES
    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.NATIVE_BATCH})
    DEFAULT_AUTH = AuthScheme.header("Authorization", "DeepL-Auth-Key {key}")

    FREE_API_URL = "https://api-free.deepl.com/v2/translate"
    PRO_API_URL = "https://api.deepl.com/v2/translate"
    MAX_TEXTS_PER_REQUEST = 50
    MAX_REQUEST_SIZE = 128 * 1024  # bytes of text per request

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Create a DeepL backend.

        Args:
            api_key: DeepL API key.
            api_url: API URL (default: chosen from the key's plan).
            enabled_languages: Languages enabled in settings.
            timeout: Total request timeout in seconds.
        """
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, timeout=timeout)
        if api_url:
            self._api_url = api_url
        elif api_key and not api_key.endswith(":fx"):
            self._api_url = self.PRO_API_URL
        else:
            self._api_url = self.FREE_API_URL

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        translations = await self._translate_chunk([text], source_lang, target_lang)
        return translations[0]

    async def native_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate a list of bodies.

        One request when the batch fits the per-request limits; otherwise one
        request per chunk, sent in order, stopping at the first failure.

        Returns:
            Translations aligned with ``texts``.

        Raises:
            ArrayLengthMismatchError: If a reply has a different item count.
            TranslationError: On translation failure.
        """
        self.check_ready(source_lang, target_lang)
        if not texts:
            return []

        chunks = self._chunk_texts(texts)
        if len(chunks) > 1:
            logger.debug("DeepL batch split into %d requests", len(chunks))

        translated: list[str] = []
        for chunk in chunks:
            translated.extend(await self._translate_chunk(chunk, source_lang, target_lang))
        return translated

    def _chunk_texts(self, texts: list[str]) -> list[list[str]]:
        """Group texts by the per-request count and byte limits."""
        chunks: list[list[str]] = []
        pending: list[str] = []
        pending_bytes = 0

        for text in texts:
            size = len(text.encode("utf-8"))
            full = (
                len(pending) >= self.MAX_TEXTS_PER_REQUEST
                or pending_bytes + size > self.MAX_REQUEST_SIZE
            )
            if full and pending:
                chunks.append(pending)
                pending, pending_bytes = [], 0
            pending.append(text)
            pending_bytes += size

        if pending:
            chunks.append(pending)
        return chunks

    async def _translate_chunk(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate a chunk of texts in one request.

        Raises:
            ArrayLengthMismatchError: If the reply has a different item count.
            TranslationError: On translation failure.
        """
        form: list[tuple[str, str]] = [("text", t) for t in texts]
        form.append(("source_lang", source_lang.upper()))
        form.append(("target_lang", target_lang.upper()))

        data = await self._request_json("POST", self._api_url, data=form)
        try:
            translations = [item["text"] for item in data["translations"]]
        except (KeyError, TypeError) as e:
            raise TranslationError(
                "DeepL returned an unexpected response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            ) from e

        if len(translations) != len(texts):
            raise ArrayLengthMismatchError(len(texts), len(translations), provider=self.name)
        return translations
