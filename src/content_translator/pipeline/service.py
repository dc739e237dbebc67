# SPDX-License-Identifier: Apache-2.0
"""Translation service facade."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from content_translator.core.comments import (
    apply_comment_translations,
    find_selected_comments,
)
from content_translator.core.models import TranslationRequest, TranslationResult, Usage
from content_translator.pipeline.batch import BatchCoordinator
from content_translator.pipeline.context import TranslationContext
from content_translator.pipeline.errors import BatchTranslationError
from content_translator.pipeline.progress import ProgressCallback
from content_translator.translators.base import (
    Capability,
    ConfigurationError,
    TranslationError,
    TranslatorBackend,
    UnsupportedLanguageError,
    UsageReportingBackend,
)

if TYPE_CHECKING:
    from content_translator.config import TranslationConfig

logger = logging.getLogger(__name__)


def _preview(text: str, limit: int = 60) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else f"{flat[:limit]}..."


@dataclass
class ArticleFields:
    """Translatable fields of a blog article."""

    title: str = ""
    summary: str = ""
    content: str = ""


class TranslationService:
    """Protected-content translation on top of a single backend.

    Code blocks, markup, URLs, paths, emails and template variables are kept
    out of the backend's hands and put back afterwards. No state is kept
    between calls; concurrent calls on one service are safe.
    """

    def __init__(
        self,
        backend: TranslatorBackend,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize TranslationService.

        Args:
            backend: Translation backend.
            progress_callback: Optional progress notifications for batches
                and articles.
        """
        self._backend = backend
        self._coordinator = BatchCoordinator(backend)
        self._progress_callback = progress_callback

    @classmethod
    def from_config(
        cls,
        config: TranslationConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> TranslationService:
        """Build a service with the backend named in the configuration."""
        from content_translator.translators import create_translator

        return cls(create_translator(config), progress_callback=progress_callback)

    @property
    def backend(self) -> TranslatorBackend:
        return self._backend

    async def __aenter__(self) -> TranslationService:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def check_ready(self, source_lang: str, target_lang: str) -> None:
        """Validate configuration and language pair before any call.

        Raises:
            ConfigurationError: If the backend lacks credentials.
            UnsupportedLanguageError: If either language is unsupported.
        """
        descriptor = self._backend.descriptor
        if not self._backend.is_configured():
            raise ConfigurationError(
                f"{descriptor.display_name} API key not configured",
                provider=descriptor.name,
            )
        if not (
            descriptor.supports_language(source_lang)
            and descriptor.supports_language(target_lang)
        ):
            raise UnsupportedLanguageError(source_lang, target_lang, provider=descriptor.name)

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        selective_lines: Collection[int] = (),
    ) -> str:
        """Translate text, keeping protected content intact.

        A backend failure returns the original text unchanged.

        Args:
            text: Text to translate.
            source_lang: Source language code.
            target_lang: Target language code.
            selective_lines: 1-based line numbers inside code blocks whose
                comments should be translated too.

        Returns:
            Translated text, or the original text if translation failed.

        Raises:
            ConfigurationError: If the backend is not configured or the
                language pair is unsupported.
        """
        request = TranslationRequest(
            text=text,
            source_lang=source_lang,
            target_lang=target_lang,
            selective_lines=frozenset(selective_lines),
        )
        try:
            result = await self._run(request, with_usage=False)
        except TranslationError as e:
            logger.warning(
                "Translation via %s failed (%s), returning original text: %s",
                self._backend.name,
                e.code.value,
                e,
            )
            return text
        return result.translated_text

    async def translate_with_usage(self, request: TranslationRequest) -> TranslationResult:
        """Translate and report usage when the backend can.

        Unlike ``translate`` this does not degrade silently: the caller asked
        for accounting, so failures are raised.

        Raises:
            ConfigurationError: If the backend is not configured or the
                language pair is unsupported.
            TranslationError: On backend failure.
        """
        return await self._run(request, with_usage=True)

    async def _run(self, request: TranslationRequest, with_usage: bool) -> TranslationResult:
        source_lang, target_lang = request.source_lang, request.target_lang
        self.check_ready(source_lang, target_lang)

        context = TranslationContext.prepare(request.text)
        usage: Usage | None = None
        if not context.needs_translation:
            logger.debug("Nothing to translate besides protected content")
            output = request.text
        else:
            output, usage = await self._translate_body(context, request, with_usage)

        if request.selective_lines:
            output = await self._translate_comments(output, context, request)
        return TranslationResult(translated_text=output, usage=usage)

    async def _translate_body(
        self,
        context: TranslationContext,
        request: TranslationRequest,
        with_usage: bool,
    ) -> tuple[str, Usage | None]:
        source_lang, target_lang = request.source_lang, request.target_lang
        logger.debug(
            "Translating %d chars with %d protected spans: %s",
            len(request.text),
            len(context.spans),
            _preview(context.body),
        )

        usage: Usage | None = None
        if with_usage and self._backend.descriptor.supports(Capability.USAGE):
            usage_backend = cast(UsageReportingBackend, self._backend)
            result = await usage_backend.translate_with_usage(
                context.body, source_lang, target_lang
            )
            translated_body, usage = result.translated_text, result.usage
        else:
            translated_body = await self._backend.translate(
                context.body, source_lang, target_lang
            )

        return context.finish(translated_body), usage

    async def _translate_comments(
        self,
        text: str,
        context: TranslationContext,
        request: TranslationRequest,
    ) -> str:
        comments = find_selected_comments(text, context.spans, request.selective_lines)
        if not comments:
            return text
        logger.debug("Translating %d selected code comments", len(comments))
        try:
            translations = await self.translate_batch(
                [comment.text for comment in comments],
                request.source_lang,
                request.target_lang,
            )
        except BatchTranslationError as e:
            logger.warning("Comment translation failed, keeping original comments: %s", e)
            return text
        return apply_comment_translations(text, comments, translations)

    async def translate_batch(
        self,
        fields: Sequence[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate several fields, in one round trip when possible.

        If the batch reply cannot be matched to the fields, or the backend
        fails, every field is translated on its own. A field whose own
        translation fails keeps its original text.

        Returns:
            Translations in field order, same length as ``fields``.

        Raises:
            ConfigurationError: If the backend is not configured or the
                language pair is unsupported.
            BatchTranslationError: If every per-field fallback failed.
        """
        if not fields:
            return []
        self.check_ready(source_lang, target_lang)

        outcome = await self._coordinator.run(fields, source_lang, target_lang)
        if outcome.ok:
            self._notify("batch", len(fields), len(fields))
            return list(outcome.translations)

        logger.warning(
            "Batch translation of %d fields via %s ended with %s (%s); "
            "translating fields one by one",
            len(fields),
            self._backend.name,
            outcome.status.value,
            outcome.detail,
        )
        return await self._fallback(fields, source_lang, target_lang)

    async def _fallback(
        self,
        fields: Sequence[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        results = list(fields)
        errors: list[Exception] = []
        attempted = 0

        for index, text in enumerate(fields):
            request = TranslationRequest(text, source_lang, target_lang)
            if TranslationContext.prepare(text).needs_translation:
                attempted += 1
                try:
                    results[index] = (await self._run(request, with_usage=False)).translated_text
                except TranslationError as e:
                    logger.warning("Field %d kept untranslated: %s", index + 1, e)
                    errors.append(e)
            self._notify("fallback", index + 1, len(fields))

        if attempted and len(errors) == attempted:
            raise BatchTranslationError(
                f"All {attempted} fields failed to translate",
                errors=errors,
            )
        return results

    async def translate_article(
        self,
        article: ArticleFields,
        source_lang: str,
        target_lang: str,
        selective_lines: Collection[int] = (),
    ) -> ArticleFields:
        """Translate title, summary and content of an article.

        Title and summary go through one batch; the content is translated
        on its own with ``translate`` (safe degrade, selective comments).
        """
        self.check_ready(source_lang, target_lang)
        title, summary = article.title, article.summary
        if title.strip() or summary.strip():
            try:
                title, summary = await self.translate_batch(
                    [article.title, article.summary], source_lang, target_lang
                )
            except BatchTranslationError as e:
                logger.warning("Title/summary translation failed, keeping originals: %s", e)
        self._notify("summary", 1, 2)

        content = await self.translate(
            article.content, source_lang, target_lang, selective_lines=selective_lines
        )
        self._notify("content", 2, 2)
        return ArticleFields(title=title, summary=summary, content=content)

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)

    async def close(self) -> None:
        """Close the backend's network resources."""
        await self._backend.close()
