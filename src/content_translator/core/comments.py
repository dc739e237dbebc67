# SPDX-License-Identifier: Apache-2.0
"""Code comment detection for selective comment translation.

Code blocks are preserved verbatim by default. Callers may name individual
lines whose comment should be translated anyway; this module finds the
comment on such a line and splices a translation back in without touching
the code around it.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from enum import Enum

from content_translator.core.models import ProtectedSpan


class CommentStyle(str, Enum):
    """Comment syntax family."""

    HASH = "hash"
    SLASH = "slash"
    XML = "xml"


@dataclass(frozen=True)
class CodeComment:
    """A comment found on one line of code.

    ``prefix + text + suffix`` reproduces the original line.
    """

    line_number: int
    prefix: str
    text: str
    suffix: str
    style: CommentStyle

    def render(self, text: str) -> str:
        """Rebuild the line with replacement comment text."""
        return f"{self.prefix}{text}{self.suffix}"


def _split_at(
    line: str, body_start: int, line_number: int, style: CommentStyle, end: int | None = None
) -> CodeComment | None:
    end = len(line) if end is None else end
    body = line[body_start:end]
    text = body.strip()
    if not text:
        return None
    lead = len(body) - len(body.lstrip())
    text_start = body_start + lead
    text_end = text_start + len(text)
    return CodeComment(
        line_number=line_number,
        prefix=line[:text_start],
        text=text,
        suffix=line[text_end:],
        style=style,
    )


def find_comment(line: str, line_number: int) -> CodeComment | None:
    """Detect the comment on a single line of code.

    Recognises whole-line ``#``, ``//`` and ``<!-- -->`` comments and
    trailing ``//`` or ``#`` comments. ``//`` following ``http`` and ``#``
    following a URL are not comments.

    Args:
        line: Code line.
        line_number: 1-based line number in the document.

    Returns:
        The comment, or None if the line has none.
    """
    stripped = line.strip()
    indent = len(line) - len(line.lstrip())

    if stripped.startswith("#"):
        return _split_at(line, indent + 1, line_number, CommentStyle.HASH)
    if stripped.startswith("//"):
        return _split_at(line, indent + 2, line_number, CommentStyle.SLASH)
    if stripped.startswith("<!--") and stripped.endswith("-->"):
        close = line.rindex("-->")
        return _split_at(line, indent + 4, line_number, CommentStyle.XML, end=close)

    slash = line.find("//")
    if slash > 0:
        if "http" not in line[max(0, slash - 6) : slash]:
            return _split_at(line, slash + 2, line_number, CommentStyle.SLASH)
        return None

    hash_index = line.find("#")
    if hash_index > 0:
        before = line[:hash_index]
        if "http" not in before and "www." not in before:
            return _split_at(line, hash_index + 1, line_number, CommentStyle.HASH)
    return None


def find_selected_comments(
    text: str,
    spans: Iterable[ProtectedSpan],
    selective_lines: Collection[int],
) -> list[CodeComment]:
    """Collect comments on selected lines that fall inside code blocks.

    Args:
        text: Text whose code blocks sit at their original line numbers.
        spans: Spans from extracting the original text.
        selective_lines: 1-based line numbers chosen by the caller.

    Returns:
        Comments in line order.
    """
    if not selective_lines:
        return []
    lines = text.split("\n")
    comments: list[CodeComment] = []
    for span in spans:
        if not span.is_multiline:
            continue
        start_line, end_line = span.location
        # Fence lines carry no comments.
        for number in range(start_line + 1, end_line):
            if number not in selective_lines or number > len(lines):
                continue
            comment = find_comment(lines[number - 1], number)
            if comment is not None:
                comments.append(comment)
    comments.sort(key=lambda c: c.line_number)
    return comments


def apply_comment_translations(
    text: str,
    comments: list[CodeComment],
    translations: list[str],
) -> str:
    """Replace comment text on each commented line with its translation."""
    if not comments:
        return text
    lines = text.split("\n")
    for comment, translated in zip(comments, translations):
        single_line = " ".join(translated.split())
        lines[comment.line_number - 1] = comment.render(single_line)
    return "\n".join(lines)
