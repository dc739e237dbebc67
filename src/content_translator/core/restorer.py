# SPDX-License-Identifier: Apache-2.0
"""Reinsertion of protected spans into translated text."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from content_translator.core.models import ProtectedSpan

logger = logging.getLogger(__name__)


def token_variants(token: str) -> list[str]:
    """Known manglings of a placeholder token, most specific first.

    Backends sometimes rewrite tokens. Only this closed set of transforms is
    recognised; all of them are matched case-insensitively.

    Args:
        token: Placeholder such as ``___PROTECT_URL_0___``.

    Returns:
        Distinct variant strings, original token first.
    """
    collapsed = token.replace("___", "")
    candidates = [
        token,
        token.replace("_", " "),
        token.replace("___", "__"),
        token.replace("___", "_"),
        token.replace("___", " "),
        collapsed,
        collapsed.replace("_", " "),
    ]
    variants: list[str] = []
    for candidate in candidates:
        # Padding spaces belong to the surrounding prose.
        value = candidate.strip()
        if value and value not in variants:
            variants.append(value)
    return variants


def _variant_pattern(token: str) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(v) for v in token_variants(token))
    # A trailing digit must not continue, or token 1 would eat token 12.
    return re.compile(f"(?:{alternatives})(?!\\d)", re.IGNORECASE)


def restore_blocks(translated_text: str, spans: Iterable[ProtectedSpan]) -> str:
    """Splice code blocks back into their recorded line windows.

    The window is addressed by absolute line number. When the translation
    came back shorter, empty lines are appended so the window exists.
    Non-empty lines found inside a window mean the backend shifted lines;
    they are overwritten and a warning is logged.
    """
    blocks = [span for span in spans if span.is_multiline]
    if not blocks:
        return translated_text

    lines = translated_text.split("\n")
    for span in blocks:
        start_line, end_line = span.location
        if len(lines) < end_line:
            lines.extend([""] * (end_line - len(lines)))
        window = lines[start_line - 1 : end_line]
        if any(line.strip() for line in window):
            logger.warning(
                "Translated text shifted lines into code block window %d-%d; "
                "overwriting",
                start_line,
                end_line,
            )
        lines[start_line - 1 : end_line] = span.original_text.split("\n")
    return "\n".join(lines)


def restore_inline(
    translated_text: str,
    spans: Iterable[ProtectedSpan],
    render: Callable[[ProtectedSpan], str] | None = None,
) -> str:
    """Replace every occurrence of each placeholder with its original text.

    ``render`` supplies the replacement instead of the original text.
    """
    restored = translated_text
    for span in spans:
        if span.token is None:
            continue
        replacement = render(span) if render is not None else span.original_text
        if span.token in restored:
            restored = restored.replace(span.token, replacement)
        pattern = _variant_pattern(span.token)
        restored = pattern.sub(lambda _m, value=replacement: value, restored)
    return restored


def restore(translated_text: str, spans: Sequence[ProtectedSpan]) -> str:
    """Reinsert protected spans into translated text.

    Args:
        translated_text: Backend output for the processed text.
        spans: Spans produced by extraction of the same source text.

    Returns:
        Translated text with all protected content restored.
    """
    if not spans:
        return translated_text
    restored = restore_blocks(translated_text, spans)
    return restore_inline(restored, spans)
