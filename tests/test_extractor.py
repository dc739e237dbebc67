# SPDX-License-Identifier: Apache-2.0
"""Tests for protected span extraction."""

from __future__ import annotations

from content_translator.core.extractor import (
    extract,
    find_code_blocks,
    has_translatable_text,
    make_token,
    strip_tokens,
)
from content_translator.core.models import SpanKind


class TestFindCodeBlocks:
    """Tests for fenced code block detection."""

    def test_single_block(self) -> None:
        """Block offsets exclude the newline after the closing fence."""
        text = "Intro\n```python\nprint(1)\n```\nOutro"
        blocks = find_code_blocks(text)

        assert len(blocks) == 1
        start, end, start_line, end_line = blocks[0]
        assert text[start:end] == "```python\nprint(1)\n```"
        assert (start_line, end_line) == (2, 4)

    def test_unclosed_fence_is_prose(self) -> None:
        """A fence without a closing line is not a block."""
        assert find_code_blocks("Intro\n```\nstill prose") == []

    def test_indented_fence(self) -> None:
        """Up to three spaces of indent open a block."""
        text = "   ```\ncode\n   ```"
        assert find_code_blocks(text)[0][2:] == (1, 3)

    def test_four_space_indent_does_not_open(self) -> None:
        """Four spaces of indent is an indented code line, not a fence."""
        assert find_code_blocks("    ```\ncode\n```") == []

    def test_multiple_blocks(self) -> None:
        """Blocks are found in order and do not nest."""
        text = "```\na\n```\ntext\n```\nb\n```"
        blocks = find_code_blocks(text)
        assert [(b[2], b[3]) for b in blocks] == [(1, 3), (5, 7)]


class TestExtract:
    """Tests for extract()."""

    def test_empty_text(self) -> None:
        """Empty text yields no spans."""
        result = extract("")
        assert result.processed_text == ""
        assert result.spans == ()

    def test_plain_text_unchanged(self) -> None:
        """Text without protected content passes through."""
        result = extract("Just some prose.")
        assert result.processed_text == "Just some prose."
        assert not result.has_spans

    def test_url_and_inline_code(self) -> None:
        """Tokens are numbered in document order."""
        result = extract("Check out https://example.com and `x=1`")

        assert result.processed_text == (
            "Check out ___PROTECT_URL_0___ and ___PROTECT_CODE_1___"
        )
        assert [span.kind for span in result.spans] == [SpanKind.URL, SpanKind.INLINE_CODE]
        assert result.spans[0].original_text == "https://example.com"
        assert result.spans[1].original_text == "`x=1`"
        assert result.spans[0].location == (10, 29)

    def test_url_trailing_punctuation_excluded(self) -> None:
        """A sentence period after a URL stays in the prose."""
        result = extract("See https://example.com/docs.")
        assert result.spans[0].original_text == "https://example.com/docs"
        assert result.processed_text.endswith("___.")

    def test_code_block_leaves_blank_window(self) -> None:
        """A block is replaced by empty lines of the same count."""
        text = "Intro\n```python\nprint(1)\n```\nOutro"
        result = extract(text)

        assert result.processed_text == "Intro\n\n\n\nOutro"
        assert result.processed_text.count("\n") == text.count("\n")
        span = result.spans[0]
        assert span.kind is SpanKind.CODE_BLOCK
        assert span.location == (2, 4)
        assert span.token is None
        assert span.line_count == 3

    def test_block_content_not_matched_again(self) -> None:
        """URLs inside a code block belong to the block."""
        result = extract("```\ncurl https://example.com\n```")
        assert len(result.spans) == 1
        assert result.spans[0].kind is SpanKind.CODE_BLOCK

    def test_url_inside_inline_code_not_split(self) -> None:
        """Inline code wins over the URL it contains."""
        result = extract("Run `open https://example.com` now")
        assert [span.kind for span in result.spans] == [SpanKind.INLINE_CODE]

    def test_embed_tag_before_generic_tag(self) -> None:
        """Embed tags are recognised ahead of generic tags."""
        result = extract('Watch <videoembed src="a" /> here')
        assert result.spans[0].kind is SpanKind.EMBED_TAG
        assert "___PROTECT_EMBED_0___" in result.processed_text

    def test_generic_tags(self) -> None:
        """Opening and closing tags are separate spans."""
        result = extract("<b>Hello</b> world")
        assert result.processed_text == "___PROTECT_TAG_0___Hello___PROTECT_TAG_1___ world"
        assert [span.original_text for span in result.spans] == ["<b>", "</b>"]

    def test_path(self) -> None:
        """File paths with an extension are protected."""
        result = extract("Edit /etc/nginx/nginx.conf and ./src/main.py today")
        paths = [s.original_text for s in result.spans if s.kind is SpanKind.PATH]
        assert paths == ["/etc/nginx/nginx.conf", "./src/main.py"]

    def test_email(self) -> None:
        """Email addresses are protected."""
        result = extract("Mail admin@example.com for access")
        assert result.spans[0].kind is SpanKind.EMAIL
        assert result.processed_text == "Mail ___PROTECT_EMAIL_0___ for access"

    def test_template_variables(self) -> None:
        """Mustache and shell-style variables are protected."""
        result = extract("Hello {{ name }}, your id is ${user_id}")
        variables = [s.original_text for s in result.spans if s.kind is SpanKind.VARIABLE]
        assert variables == ["{{ name }}", "${user_id}"]

    def test_spans_ordered_and_disjoint(self) -> None:
        """Spans come in document order without overlap."""
        text = "<i>a</i> `b` https://c.io d@e.com /f/g.txt {h}"
        spans = extract(text).spans
        starts = [span.location[0] for span in spans]
        assert starts == sorted(starts)
        for left, right in zip(spans, spans[1:]):
            assert left.location[1] <= right.location[0]
        assert [span.id for span in spans] == list(range(len(spans)))

    def test_idempotent(self) -> None:
        """Same input, same output."""
        text = "Intro `x`\n```\ncode\n```\nhttps://example.com"
        assert extract(text) == extract(text)

    def test_inline_spans_do_not_cross_lines(self) -> None:
        """Processed text keeps the source line count."""
        text = "a `b\nc` d\n<span\nclass=x>"
        result = extract(text)
        assert result.processed_text.count("\n") == text.count("\n")


class TestTokens:
    """Tests for token helpers."""

    def test_make_token(self) -> None:
        assert make_token(SpanKind.VARIABLE, 7) == "___PROTECT_VAR_7___"

    def test_strip_tokens(self) -> None:
        assert strip_tokens("a ___PROTECT_URL_0___ b") == "a  b"

    def test_has_translatable_text(self) -> None:
        """Only placeholders and whitespace count as nothing to translate."""
        assert has_translatable_text(extract("Hello `x`"))
        assert not has_translatable_text(extract("`x` https://example.com"))
        assert not has_translatable_text(extract("```\ncode\n```"))
        assert not has_translatable_text(extract("   \n"))
