# SPDX-License-Identifier: Apache-2.0
"""Tests for CLI argument parsing and execution."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from content_translator.cli import (
    build_config,
    describe_error,
    parse_args,
    parse_selective_lines,
    run,
)
from content_translator.pipeline.service import TranslationService
from content_translator.translators.base import ErrorCode, TranslationError

from .stubs import StubTranslator, UsageStubTranslator


class TestParseArgs:
    """Tests for parse_args function."""

    def test_defaults(self) -> None:
        """Test default values for a bare input argument."""
        args = parse_args(["post.md"])
        assert args.input == "post.md"
        assert args.backend is None
        assert args.source == "zh"
        assert args.target == "en"
        assert args.locale is None
        assert args.output is None
        assert args.usage is False
        assert args.sanitize is False

    def test_backend_option(self) -> None:
        args = parse_args(["post.md", "-b", "deepl", "-s", "en", "-t", "de"])
        assert args.backend == "deepl"
        assert args.source == "en"
        assert args.target == "de"

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["post.md", "--backend", "babelfish"])

    def test_output_is_path(self) -> None:
        args = parse_args(["post.md", "-o", "out/post.en.md"])
        assert args.output == Path("out/post.en.md")


class TestParseSelectiveLines:
    """Tests for parse_selective_lines function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, frozenset()),
            ("", frozenset()),
            ("3, 7", frozenset({3, 7})),
            ("12,,12", frozenset({12})),
        ],
    )
    def test_valid(self, value: str | None, expected: frozenset[int]) -> None:
        assert parse_selective_lines(value) == expected

    @pytest.mark.parametrize("value", ["0", "x", "3,-1"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_selective_lines(value)


class TestBuildConfig:
    """Tests for build_config function."""

    def test_environment_with_overrides(self) -> None:
        args = parse_args(["post.md", "-b", "deepl", "--timeout", "5"])
        with patch.dict(os.environ, {"DEEPL_API_KEY": "env-key"}, clear=True):
            config = build_config(args)
        assert config.provider == "deepl"
        assert config.api_key == "env-key"
        assert config.timeout == 5.0

    def test_settings_file(self, tmp_path: Path) -> None:
        """Settings file values apply, command line options win."""
        settings = tmp_path / "settings.json"
        settings.write_text(
            json.dumps({"translation": {"provider": "deepl", "apiKey": "file-key"}}),
            encoding="utf-8",
        )
        args = parse_args(
            ["post.md", "--settings", str(settings), "-b", "openai", "--model", "gpt-4o"]
        )
        config = build_config(args)
        assert config.provider == "openai"
        assert config.api_key == "file-key"
        assert config.model == "gpt-4o"

    def test_auth_options(self) -> None:
        args = parse_args(
            ["post.md", "--auth-type", "custom", "--auth-header", "X-Token", "--locale", "zh"]
        )
        with patch.dict(os.environ, {}, clear=True):
            config = build_config(args)
        assert config.auth_type == "custom"
        assert config.custom_auth_header == "X-Token"
        assert config.locale == "zh"

    def test_settings_locale_kept(self, tmp_path: Path) -> None:
        """Without --locale the settings file decides the message language."""
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"translation": {"locale": "zh"}}), encoding="utf-8")
        config = build_config(parse_args(["post.md", "--settings", str(settings)]))
        assert config.locale == "zh"

        args = parse_args(["post.md", "--settings", str(settings), "--locale", "en"])
        assert build_config(args).locale == "en"


class TestDescribeError:
    """Tests for describe_error function."""

    def test_english(self) -> None:
        error = TranslationError("DeepL: quota", code=ErrorCode.RATE_LIMITED, provider="deepl")
        text = describe_error(error, "en")
        assert text.startswith("DeepL: quota\n")
        assert "Too many requests, please retry later" in text
        assert "Hint:" in text

    def test_chinese(self) -> None:
        error = TranslationError("bad key", code=ErrorCode.UNAUTHORIZED, provider="deepl")
        assert "提示" in describe_error(error, "zh")


class TestRun:
    """Tests for run function."""

    @pytest.fixture
    def article(self, tmp_path: Path) -> Path:
        path = tmp_path / "post.md"
        path.write_text("Hello `x`\n```\ncode\n```", encoding="utf-8")
        return path

    @pytest.mark.asyncio
    async def test_sanitize_only(self, tmp_path: Path) -> None:
        source = tmp_path / "broken.md"
        source.write_text("Text ___PROTECT_URL_3___ here", encoding="utf-8")
        output = tmp_path / "fixed.md"

        exit_code = await run(parse_args([str(source), "--sanitize", "-o", str(output)]))

        assert exit_code == 0
        assert output.read_text(encoding="utf-8") == "Text  here"

    @pytest.mark.asyncio
    async def test_translate_to_file(self, article: Path, tmp_path: Path) -> None:
        output = tmp_path / "out" / "post.ja.md"
        backend = StubTranslator()
        args = parse_args([str(article), "-s", "en", "-t", "ja", "-o", str(output)])

        with patch.object(
            TranslationService, "from_config", return_value=TranslationService(backend)
        ):
            exit_code = await run(args)

        assert exit_code == 0
        assert output.read_text(encoding="utf-8") == "HELLO `x`\n```\ncode\n```"
        assert backend.closed

    @pytest.mark.asyncio
    async def test_article_mode(
        self, article: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = parse_args([str(article), "-s", "en", "-t", "ja", "--title", "Hi"])

        with patch.object(
            TranslationService,
            "from_config",
            return_value=TranslationService(StubTranslator()),
        ):
            exit_code = await run(args)

        assert exit_code == 0
        result = json.loads(capsys.readouterr().out)
        assert result == {
            "title": "HI",
            "summary": "",
            "content": "HELLO `x`\n```\ncode\n```",
        }

    @pytest.mark.asyncio
    async def test_usage_report(
        self, article: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = parse_args([str(article), "-s", "en", "-t", "ja", "--usage"])

        with patch.object(
            TranslationService,
            "from_config",
            return_value=TranslationService(UsageStubTranslator()),
        ):
            exit_code = await run(args)

        assert exit_code == 0
        captured = capsys.readouterr()
        assert "(22 total)" in captured.err
        assert captured.out.startswith("HELLO `x`")

    @pytest.mark.asyncio
    async def test_unsupported_language(
        self, article: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = parse_args([str(article), "-s", "en", "-t", "ko"])

        with patch.object(
            TranslationService,
            "from_config",
            return_value=TranslationService(StubTranslator()),
        ):
            exit_code = await run(args)

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_error_in_settings_locale(
        self, article: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"translation": {"locale": "zh"}}), encoding="utf-8")
        args = parse_args([str(article), "-s", "en", "-t", "ko", "--settings", str(settings)])

        with patch.object(
            TranslationService,
            "from_config",
            return_value=TranslationService(StubTranslator()),
        ):
            exit_code = await run(args)

        assert exit_code == 1
        assert "提示" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_invalid_settings(self, article: Path, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"authType": "bogus"}), encoding="utf-8")

        exit_code = await run(parse_args([str(article), "--settings", str(settings)]))
        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_invalid_selective_lines(self, article: Path) -> None:
        exit_code = await run(parse_args([str(article), "--selective-lines", "x"]))
        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_missing_input(self, tmp_path: Path) -> None:
        exit_code = await run(parse_args([str(tmp_path / "missing.md")]))
        assert exit_code == 1
