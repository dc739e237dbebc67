# SPDX-License-Identifier: Apache-2.0
"""Tests for per-call translation context."""

from __future__ import annotations

import pytest

from content_translator.pipeline.context import TranslationContext, split_edges


class TestSplitEdges:
    """Tests for split_edges()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello", ("", "Hello", "")),
            ("\n\nHello\n", ("\n\n", "Hello", "\n")),
            ("\n  indented\n\n", ("\n", "  indented", "\n\n")),
            ("a\n\nb", ("", "a\n\nb", "")),
            (" \n\t\n", (" \n\t\n", "", "")),
            ("", ("", "", "")),
        ],
    )
    def test_split(self, text: str, expected: tuple[str, str, str]) -> None:
        assert split_edges(text) == expected
        assert "".join(split_edges(text)) == text


class TestTranslationContext:
    """Tests for TranslationContext."""

    def test_prepare(self) -> None:
        context = TranslationContext.prepare("\nSee `x`\n```\ncode\n```")
        assert context.leading == "\n"
        assert context.body == "See ___PROTECT_CODE_0___"
        assert context.trailing == "\n\n\n"
        assert len(context.spans) == 2
        assert context.needs_translation

    def test_finish_restores(self) -> None:
        context = TranslationContext.prepare("\nSee `x`\n```\ncode\n```")
        assert context.finish("\n\nVOIR ___PROTECT_CODE_0___\n") == "\nVOIR `x`\n```\ncode\n```"

    def test_finish_without_translatable_text(self) -> None:
        context = TranslationContext.prepare("`only code`")
        assert not context.needs_translation
        assert context.finish("anything") == "`only code`"

    def test_finish_sanitizes_leftovers(self) -> None:
        context = TranslationContext.prepare("Hello `x`")
        assert context.finish("Bonjour ___PROTECT_CODE_0___ ___PROTECT_URL_9___") == (
            "Bonjour `x` "
        )
