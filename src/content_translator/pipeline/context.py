# SPDX-License-Identifier: Apache-2.0
"""Per-call translation state."""

from __future__ import annotations

from dataclasses import dataclass

from content_translator.core.extractor import extract, has_translatable_text
from content_translator.core.models import ExtractionResult, ProtectedSpan
from content_translator.core.restorer import restore_blocks, restore_inline
from content_translator.core.sanitizer import scrub_residue


def _marker(span: ProtectedSpan) -> str:
    # Private-use characters; no placeholder pattern can match them.
    return f"\uE000{span.id}\uE001"


def split_edges(text: str) -> tuple[str, str, str]:
    """Split text into (leading blank lines, body, trailing blank lines).

    Only whole lines count as edges; indentation of the first content line
    stays in the body. Whitespace-only text is returned entirely as the
    leading edge.
    """
    head = len(text) - len(text.lstrip())
    if head == len(text):
        return text, "", ""
    body_start = text.rfind("\n", 0, head) + 1
    tail = text.find("\n", len(text.rstrip()))
    body_end = tail if tail != -1 else len(text)
    return text[:body_start], text[body_start:body_end], text[body_end:]


@dataclass(frozen=True)
class TranslationContext:
    """Spans and edge lines of one text, consumed once by ``finish``.

    Backends tend to trim leading and trailing newlines, which would shift
    code block windows, so only the body is sent and the edges are put
    back afterwards.
    """

    original_text: str
    extraction: ExtractionResult
    leading: str = ""
    body: str = ""
    trailing: str = ""

    @classmethod
    def prepare(cls, text: str) -> TranslationContext:
        extraction = extract(text)
        leading, body, trailing = split_edges(extraction.processed_text)
        return cls(
            original_text=text,
            extraction=extraction,
            leading=leading,
            body=body,
            trailing=trailing,
        )

    @property
    def spans(self) -> tuple[ProtectedSpan, ...]:
        return self.extraction.spans

    @property
    def needs_translation(self) -> bool:
        """False for empty text and text made only of protected content."""
        return has_translatable_text(self.extraction)

    def finish(self, translated_body: str) -> str:
        """Reattach edges, restore protected spans and clean up leftovers.

        Residue is scrubbed while this text's own spans are still held by
        markers, so protected content is never touched, and line numbers
        stay where the code blocks were put back.
        """
        if not self.needs_translation:
            return self.original_text
        text = f"{self.leading}{translated_body.strip(chr(10))}{self.trailing}"
        text = restore_blocks(text, self.spans)

        block_lines: set[int] = set()
        for span in self.spans:
            if span.is_multiline:
                start_line, end_line = span.location
                block_lines.update(range(start_line, end_line + 1))
        text = scrub_residue(restore_inline(text, self.spans, _marker), block_lines)

        for span in self.spans:
            if span.token is not None:
                text = text.replace(_marker(span), span.original_text)
        return text
