# SPDX-License-Identifier: Apache-2.0
"""Data models for protected-content translation.

These types carry the state of a single translation call: the spans that
were pulled out of the source text, the request that produced them and the
result handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SpanKind(str, Enum):
    """Kinds of non-translatable content, in extraction priority order."""

    CODE_BLOCK = "code-block"
    INLINE_CODE = "inline-code"
    EMBED_TAG = "embed-tag"
    GENERIC_TAG = "generic-tag"
    URL = "url"
    PATH = "path"
    EMAIL = "email"
    VARIABLE = "variable"

    @property
    def is_multiline(self) -> bool:
        """Whether spans of this kind are tracked by line range."""
        return self is SpanKind.CODE_BLOCK

    @property
    def tag(self) -> str:
        """Short tag embedded in placeholder tokens."""
        return _KIND_TAGS[self]


_KIND_TAGS = {
    SpanKind.CODE_BLOCK: "BLOCK",
    SpanKind.INLINE_CODE: "CODE",
    SpanKind.EMBED_TAG: "EMBED",
    SpanKind.GENERIC_TAG: "TAG",
    SpanKind.URL: "URL",
    SpanKind.PATH: "PATH",
    SpanKind.EMAIL: "EMAIL",
    SpanKind.VARIABLE: "VAR",
}


@dataclass(frozen=True)
class ProtectedSpan:
    """A region of the source text that must survive translation verbatim.

    Attributes:
        id: Position of the span in document order (0-based).
        kind: Span kind.
        original_text: Literal source content.
        location: For inline kinds, the half-open character range
            ``(start, end)`` in the source text. For code blocks, the
            1-based inclusive line range ``(start_line, end_line)``.
        token: Placeholder that replaced an inline span, None for blocks.
    """

    id: int
    kind: SpanKind
    original_text: str
    location: tuple[int, int]
    token: str | None = None

    @property
    def is_multiline(self) -> bool:
        """Whether this span is restored by line window."""
        return self.kind.is_multiline

    @property
    def line_count(self) -> int:
        """Number of lines occupied by a code block span (1 for inline)."""
        if not self.is_multiline:
            return 1
        start, end = self.location
        return end - start + 1


@dataclass(frozen=True)
class ExtractionResult:
    """Output of protected span extraction."""

    processed_text: str
    spans: tuple[ProtectedSpan, ...] = ()

    @property
    def has_spans(self) -> bool:
        return bool(self.spans)

    @property
    def tokens(self) -> list[str]:
        """Placeholder tokens present in the processed text."""
        return [span.token for span in self.spans if span.token is not None]


@dataclass(frozen=True)
class TranslationRequest:
    """A single translation request.

    Attributes:
        text: Text to translate.
        source_lang: Source language code.
        target_lang: Target language code.
        selective_lines: 1-based line numbers inside code blocks whose comment
            should be translated. Code comments are preserved by default.
    """

    text: str
    source_lang: str
    target_lang: str
    selective_lines: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Usage:
    """Token usage and estimated cost reported by a backend."""

    input_units: int = 0
    output_units: int = 0
    total_units: int = 0
    estimated_cost: float = 0.0
    currency: str = "USD"

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_units=self.input_units + other.input_units,
            output_units=self.output_units + other.output_units,
            total_units=self.total_units + other.total_units,
            estimated_cost=self.estimated_cost + other.estimated_cost,
            currency=self.currency,
        )


@dataclass(frozen=True)
class TranslationResult:
    """Translated text plus optional usage counters."""

    translated_text: str
    usage: Usage | None = None
