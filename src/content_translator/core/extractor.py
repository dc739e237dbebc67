# SPDX-License-Identifier: Apache-2.0
"""Protected span extraction.

Finds content that must not be translated (code, markup, URLs, paths,
emails, template variables) and swaps it for placeholders before the text is
sent to a backend.

Matchers run in a fixed priority order. Whatever an earlier matcher claims is
masked out before the next one runs, so spans never overlap. Inline matchers
never cross a newline, which keeps the processed text line-aligned with the
source.
"""

from __future__ import annotations

import logging
import re

from content_translator.core.models import ExtractionResult, ProtectedSpan, SpanKind

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "___PROTECT_"
TOKEN_SUFFIX = "___"
TOKEN_PATTERN = re.compile(r"___PROTECT_[A-Z]+_\d+___")

FENCE_OPEN = re.compile(r"^ {0,3}```")

# Priority order after fenced code blocks.
INLINE_MATCHERS: tuple[tuple[SpanKind, re.Pattern[str]], ...] = (
    (SpanKind.INLINE_CODE, re.compile(r"`[^`\n]+`")),
    (SpanKind.EMBED_TAG, re.compile(r"<[a-z][a-z0-9]*embed\b[^<>\n]*/?>", re.IGNORECASE)),
    (SpanKind.GENERIC_TAG, re.compile(r"</?[a-zA-Z][^<>\n]*>")),
    (SpanKind.URL, re.compile(r"https?://[^\s<>\"'\]]*[^\s<>\"'\].,;:!?]")),
    (
        SpanKind.PATH,
        re.compile(r"(?<![\w/.~])(?:~|\.{1,2})?/[^\s<>\"'\]]+\.[A-Za-z0-9]+"),
    ),
    (SpanKind.EMAIL, re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")),
    (SpanKind.VARIABLE, re.compile(r"\$?\{\{[^{}\n]+\}\}|\$?\{[^{}\n]+\}")),
)


def make_token(kind: SpanKind, counter: int) -> str:
    """Build the placeholder token for an inline span."""
    return f"{TOKEN_PREFIX}{kind.tag}_{counter}{TOKEN_SUFFIX}"


def find_code_blocks(text: str) -> list[tuple[int, int, int, int]]:
    """Locate fenced code blocks.

    A block opens on a line starting with a backtick fence (up to three
    spaces of indent) and closes on the next line whose stripped content
    starts with a fence. An unclosed fence is treated as prose.

    Args:
        text: Source text.

    Returns:
        List of ``(start_offset, end_offset, start_line, end_line)``.
        Offsets cover whole lines, excluding the final newline; lines are
        1-based and inclusive.
    """
    lines = text.split("\n")
    offsets: list[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1

    blocks: list[tuple[int, int, int, int]] = []
    i = 0
    while i < len(lines):
        if not FENCE_OPEN.match(lines[i]):
            i += 1
            continue
        close = next(
            (j for j in range(i + 1, len(lines)) if lines[j].lstrip().startswith("```")),
            None,
        )
        if close is None:
            break
        start = offsets[i]
        end = offsets[close] + len(lines[close])
        blocks.append((start, end, i + 1, close + 1))
        i = close + 1
    return blocks


def _mask(text: str, ranges: list[tuple[int, int]]) -> str:
    """Blank out claimed ranges, keeping newlines so offsets and lines hold."""
    if not ranges:
        return text
    chars = list(text)
    for start, end in ranges:
        for k in range(start, end):
            if chars[k] != "\n":
                chars[k] = " "
    return "".join(chars)


def _overlaps(start: int, end: int, claimed: list[tuple[SpanKind, int, int]]) -> bool:
    return any(start < c_end and c_start < end for _, c_start, c_end in claimed)


def extract(text: str) -> ExtractionResult:
    """Replace protected content with placeholders.

    Pure and idempotent: the same input always yields the same processed
    text and span list.

    Args:
        text: Source text.

    Returns:
        Processed text and the spans found, in document order.
    """
    if not text:
        return ExtractionResult(processed_text=text)

    claimed: list[tuple[SpanKind, int, int]] = []
    block_lines: dict[int, tuple[int, int]] = {}

    for start, end, start_line, end_line in find_code_blocks(text):
        claimed.append((SpanKind.CODE_BLOCK, start, end))
        block_lines[start] = (start_line, end_line)

    masked = _mask(text, [(start, end) for _, start, end in claimed])

    for kind, pattern in INLINE_MATCHERS:
        found: list[tuple[int, int]] = []
        for match in pattern.finditer(masked):
            if _overlaps(match.start(), match.end(), claimed):
                continue
            found.append((match.start(), match.end()))
        for start, end in found:
            claimed.append((kind, start, end))
        masked = _mask(masked, found)

    if not claimed:
        return ExtractionResult(processed_text=text)

    claimed.sort(key=lambda item: item[1])

    pieces: list[str] = []
    spans: list[ProtectedSpan] = []
    cursor = 0
    for counter, (kind, start, end) in enumerate(claimed):
        pieces.append(text[cursor:start])
        original = text[start:end]
        if kind.is_multiline:
            start_line, end_line = block_lines[start]
            pieces.append("\n" * (end_line - start_line))
            spans.append(
                ProtectedSpan(
                    id=counter,
                    kind=kind,
                    original_text=original,
                    location=(start_line, end_line),
                )
            )
        else:
            token = make_token(kind, counter)
            pieces.append(token)
            spans.append(
                ProtectedSpan(
                    id=counter,
                    kind=kind,
                    original_text=original,
                    location=(start, end),
                    token=token,
                )
            )
        cursor = end
    pieces.append(text[cursor:])

    logger.debug(
        "Extracted %d protected spans (%d code blocks)",
        len(spans),
        len(block_lines),
    )
    return ExtractionResult(processed_text="".join(pieces), spans=tuple(spans))


def strip_tokens(processed_text: str) -> str:
    """Remove placeholder tokens, leaving only translatable prose."""
    return TOKEN_PATTERN.sub("", processed_text)


def has_translatable_text(result: ExtractionResult) -> bool:
    """Whether anything besides placeholders and whitespace remains."""
    return bool(strip_tokens(result.processed_text).strip())
