# SPDX-License-Identifier: Apache-2.0
"""Multi-field translation in a single backend round trip."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import cast

from content_translator.pipeline.context import TranslationContext
from content_translator.translators.base import (
    ArrayLengthMismatchError,
    Capability,
    NativeBatchBackend,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
)

logger = logging.getLogger(__name__)

# "N." at the start of a line; the separator space is optional.
NUMBERED_LINE = re.compile(r"^[ \t]*(\d+)\.[ \t]?", re.MULTILINE)


class BatchStatus(str, Enum):
    """How a batch round trip ended."""

    SUCCESS = "success"
    PARSE_MISMATCH = "parse-mismatch"
    BACKEND_ERROR = "backend-error"


@dataclass(frozen=True)
class BatchOutcome:
    """Result of one batch attempt.

    Attributes:
        status: Outcome variant.
        translations: Final texts in field order (SUCCESS only).
        error: Backend error (BACKEND_ERROR, or a PARSE_MISMATCH raised by
            the backend itself).
        detail: Short description of a parse mismatch.
    """

    status: BatchStatus
    translations: tuple[str, ...] = ()
    error: TranslatorError | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is BatchStatus.SUCCESS

    @classmethod
    def success(cls, translations: Sequence[str]) -> BatchOutcome:
        return cls(BatchStatus.SUCCESS, translations=tuple(translations))

    @classmethod
    def mismatch(cls, detail: str, error: TranslatorError | None = None) -> BatchOutcome:
        return cls(BatchStatus.PARSE_MISMATCH, error=error, detail=detail)

    @classmethod
    def backend_error(cls, error: TranslatorError) -> BatchOutcome:
        return cls(BatchStatus.BACKEND_ERROR, error=error, detail=str(error))


def join_numbered(texts: Sequence[str]) -> str:
    """Number texts "1. ...", "2. ..." and join them with blank lines."""
    return "\n\n".join(f"{i}. {text}" for i, text in enumerate(texts, 1))


def split_numbered(reply: str, expected: int) -> list[str] | None:
    """Split a numbered reply back into its items.

    Returns None unless the numbered lines are exactly 1..expected in order
    and nothing but whitespace precedes the first one.
    """
    matches = list(NUMBERED_LINE.finditer(reply))
    numbers = [int(match.group(1)) for match in matches]
    if numbers != list(range(1, expected + 1)):
        return None
    if reply[: matches[0].start()].strip():
        return None

    items: list[str] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(reply)
        items.append(reply[match.end() : end].rstrip())
    return items


class BatchCoordinator:
    """Translate several fields with one backend call.

    Each field keeps its own spans and edges. Backends with native batching
    get the bodies as a list; the rest get one numbered text that is split
    back on the numbers. Any doubt about which reply belongs to which field
    discards the whole reply.
    """

    def __init__(self, backend: TranslatorBackend) -> None:
        self._backend = backend

    async def run(
        self,
        fields: Sequence[str],
        source_lang: str,
        target_lang: str,
    ) -> BatchOutcome:
        """Translate fields in one round trip.

        Args:
            fields: Texts to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            Outcome; translations are set only on SUCCESS.

        Raises:
            ConfigurationError: If the backend is not configured or the
                language pair is unsupported.
        """
        contexts = [TranslationContext.prepare(text) for text in fields]
        pending = [i for i, ctx in enumerate(contexts) if ctx.needs_translation]
        if not pending:
            return BatchOutcome.success([ctx.original_text for ctx in contexts])

        bodies = [contexts[i].body for i in pending]
        logger.debug(
            "Batch: %d fields, %d to send via %s",
            len(contexts),
            len(bodies),
            self._backend.name,
        )

        try:
            translated = await self._send(bodies, source_lang, target_lang)
        except ArrayLengthMismatchError as e:
            return BatchOutcome.mismatch(str(e), error=e)
        except TranslationError as e:
            return BatchOutcome.backend_error(e)

        if isinstance(translated, BatchOutcome):
            return translated

        results = [ctx.original_text for ctx in contexts]
        for index, body in zip(pending, translated):
            results[index] = contexts[index].finish(body)
        return BatchOutcome.success(results)

    async def _send(
        self,
        bodies: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str] | BatchOutcome:
        if len(bodies) == 1:
            return [await self._backend.translate(bodies[0], source_lang, target_lang)]

        if self._backend.descriptor.supports(Capability.NATIVE_BATCH):
            batch_backend = cast(NativeBatchBackend, self._backend)
            translated = await batch_backend.native_batch(bodies, source_lang, target_lang)
            if len(translated) != len(bodies):
                return BatchOutcome.mismatch(
                    f"Expected {len(bodies)} translations but got {len(translated)}"
                )
            return list(translated)

        # A numbered line inside a field would be read as a field boundary.
        if any(NUMBERED_LINE.search(body) for body in bodies):
            return BatchOutcome.mismatch("field text contains numbered lines")

        reply = await self._backend.translate(join_numbered(bodies), source_lang, target_lang)
        items = split_numbered(reply, len(bodies))
        if items is None:
            logger.debug("Numbered batch reply did not split into %d items", len(bodies))
            return BatchOutcome.mismatch(
                f"reply did not contain items numbered 1..{len(bodies)}"
            )
        return items
