# SPDX-License-Identifier: Apache-2.0
"""Cleanup of leaked or mangled placeholder artifacts.

``scrub_residue`` runs at the end of every translation and never changes the
line count. ``sanitize`` is the repair tool for content stored while older
placeholder formats were in use; it also tidies blank lines.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Collection

from content_translator.core.extractor import find_code_blocks

logger = logging.getLogger(__name__)

_TAGS = "BLOCK|CODE|EMBED|TAG|URL|PATH|EMAIL|VAR"

PLACEHOLDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Current token shape and its underscore manglings
    re.compile(rf"_{{0,3}}PROTECT_(?:{_TAGS})_\d+_{{0,3}}", re.IGNORECASE),
    re.compile(rf"PROTECT (?:{_TAGS}) \d+", re.IGNORECASE),
    # Legacy shapes
    re.compile(r"___TRANSLATION_PROTECT_\d+_\d+___", re.IGNORECASE),
    re.compile(r"__ ?Translation[_ ]Protect_\d+_\d+__", re.IGNORECASE),
    re.compile(r"__ ?Protected_\d+_\d+__", re.IGNORECASE),
    re.compile(r"_TRANSLATION_PROTECT_\d+_\d+_", re.IGNORECASE),
    re.compile(r"TRANSLATION_PROTECT_\d+_\d+", re.IGNORECASE),
    re.compile(r"Protected_\d+_\d+", re.IGNORECASE),
    # Underscores left glued to the start of a tag or fence line
    re.compile(r"^_+(?=<[a-zA-Z]|```)", re.MULTILINE),
)

_EXCESS_BLANK_LINES = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")


def _remove_placeholders(segment: str) -> str:
    cleaned = segment
    for pattern in PLACEHOLDER_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned


def _clean_prose(segment: str) -> str:
    cleaned = _remove_placeholders(segment)
    if cleaned != segment:
        cleaned = _EXCESS_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned


def _sanitize_once(text: str) -> str:
    pieces: list[str] = []
    cursor = 0
    for start, end, _, _ in find_code_blocks(text):
        pieces.append(_clean_prose(text[cursor:start]))
        pieces.append(text[start:end])
        cursor = end
    pieces.append(_clean_prose(text[cursor:]))
    return "".join(pieces)


def sanitize(text: str) -> str:
    """Remove residual placeholder-shaped substrings.

    Fenced code blocks are left untouched. Blank-line runs are collapsed only
    where a removal happened. Idempotent: each changing pass shortens the
    text, and passes repeat until nothing changes.

    Args:
        text: Text possibly containing placeholder residue.

    Returns:
        Cleaned text.
    """
    if not text:
        return text
    current = text
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            break
        current = cleaned
    if current != text:
        logger.debug("Sanitizer removed %d characters", len(text) - len(current))
    return current


def _scrub_line(line: str) -> str:
    current = line
    while True:
        cleaned = _remove_placeholders(current)
        if cleaned == current:
            break
        current = cleaned
    if current != line and not current.strip():
        return ""
    return current


def scrub_residue(text: str, protected_lines: Collection[int] = ()) -> str:
    """Remove placeholder residue line by line, keeping the line count.

    A line that held nothing but residue becomes empty. Lines listed in
    ``protected_lines`` (1-based) are not touched.
    """
    lines = text.split("\n")
    scrubbed = [
        line if number in protected_lines else _scrub_line(line)
        for number, line in enumerate(lines, 1)
    ]
    if scrubbed != lines:
        logger.debug("Removed placeholder residue from translated text")
    return "\n".join(scrubbed)
