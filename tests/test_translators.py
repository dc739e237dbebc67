# SPDX-License-Identifier: Apache-2.0
"""Tests for translation backends."""

import os
from unittest.mock import patch

import pytest
from deep_translator.exceptions import TooManyRequests

from content_translator.config import TranslationConfig
from content_translator.translators import (
    PROVIDERS,
    ArrayLengthMismatchError,
    AuthScheme,
    AuthType,
    Capability,
    ConfigurationError,
    ErrorCode,
    GoogleFreeTranslator,
    QuotaExceededError,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
    UnsupportedLanguageError,
    UsageReportingBackend,
    create_translator,
    get_claude_translator,
    get_deepl_translator,
    get_gemini_translator,
    get_google_translator,
    get_litellm_translator,
    get_libretranslate_translator,
    get_mymemory_translator,
    get_openai_translator,
)
from content_translator.translators.google_free import google_language_code

from .stubs import StubTranslator


class TestTranslatorBackendProtocol:
    """Test TranslatorBackend protocol."""

    def test_google_free_implements_protocol(self) -> None:
        """GoogleFreeTranslator should implement TranslatorBackend protocol."""
        translator = GoogleFreeTranslator()
        assert isinstance(translator, TranslatorBackend)

    def test_protocol_has_name(self) -> None:
        translator = GoogleFreeTranslator()
        assert translator.name == "google-free"

    def test_usage_protocol(self) -> None:
        """LLM backends report usage; plain ones do not."""
        OpenAITranslator = get_openai_translator()
        assert isinstance(OpenAITranslator(api_key="test-key"), UsageReportingBackend)
        assert not isinstance(GoogleFreeTranslator(), UsageReportingBackend)


class TestExceptions:
    """Test exception hierarchy."""

    def test_translation_error_inherits_from_translator_error(self) -> None:
        assert issubclass(TranslationError, TranslatorError)

    def test_configuration_error_inherits_from_translator_error(self) -> None:
        assert issubclass(ConfigurationError, TranslatorError)

    def test_unsupported_language_is_configuration_error(self) -> None:
        assert issubclass(UnsupportedLanguageError, ConfigurationError)

    def test_runtime_errors_are_translation_errors(self) -> None:
        assert issubclass(QuotaExceededError, TranslationError)
        assert issubclass(ArrayLengthMismatchError, TranslationError)

    def test_default_codes(self) -> None:
        assert TranslationError("x").code is ErrorCode.UNKNOWN
        assert ConfigurationError("x").code is ErrorCode.NOT_CONFIGURED
        assert UnsupportedLanguageError("en", "xx").code is ErrorCode.UNSUPPORTED_LANGUAGE
        assert QuotaExceededError("x").code is ErrorCode.RATE_LIMITED
        assert ArrayLengthMismatchError(2, 1).code is ErrorCode.PARSE_MISMATCH

    def test_retryable(self) -> None:
        assert TranslationError("x", code=ErrorCode.TIMEOUT).retryable
        assert not ConfigurationError("x").retryable

    def test_mismatch_message(self) -> None:
        error = ArrayLengthMismatchError(3, 2, provider="deepl")
        assert str(error) == "Expected 3 translations but got 2"
        assert (error.expected, error.actual, error.provider) == (3, 2, "deepl")


class TestAuthScheme:
    """Tests for credential placement."""

    def test_bearer(self) -> None:
        headers: dict[str, str] = {}
        params: dict[str, str] = {}
        AuthScheme.bearer().apply("sk-1", headers, params)
        assert headers == {"Authorization": "Bearer sk-1"}
        assert params == {}

    def test_header_template(self) -> None:
        headers: dict[str, str] = {}
        AuthScheme.header("Authorization", "DeepL-Auth-Key {key}").apply("k", headers, {})
        assert headers == {"Authorization": "DeepL-Auth-Key k"}

    def test_query(self) -> None:
        params: dict[str, str] = {}
        AuthScheme.query("key").apply("k", {}, params)
        assert params == {"key": "k"}

    def test_none_and_missing_key(self) -> None:
        headers: dict[str, str] = {}
        AuthScheme().apply("k", headers, {})
        AuthScheme.bearer().apply(None, headers, {})
        assert headers == {}
        assert AuthScheme().type is AuthType.NONE


class TestBaseTranslator:
    """Shared adapter behavior, via a stub backend."""

    def test_descriptor(self) -> None:
        translator = StubTranslator()
        descriptor = translator.descriptor
        assert descriptor.name == "stub"
        assert descriptor.display_name == "Stub"
        assert descriptor.supports_language("ja")
        assert not descriptor.supports(Capability.USAGE)

    def test_enabled_languages_intersect(self) -> None:
        """Settings can only narrow the provider's own language set."""
        translator = StubTranslator(enabled_languages=["en", "zh", "ko"])
        assert translator.descriptor.supported_languages == frozenset({"en", "zh"})

    @pytest.mark.asyncio
    async def test_unsupported_language_before_call(self) -> None:
        translator = StubTranslator()
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            await translator.translate("Hello", "en", "ko")
        assert exc_info.value.target_lang == "ko"
        assert translator.calls == []

    @pytest.mark.asyncio
    async def test_empty_text_skips_call(self) -> None:
        translator = StubTranslator()
        assert await translator.translate("", "en", "ja") == ""
        assert await translator.translate("  \n", "en", "ja") == "  \n"
        assert translator.calls == []

    @pytest.mark.asyncio
    async def test_missing_key(self) -> None:
        """Keyed backends refuse to run without credentials."""
        DeepLTranslator = get_deepl_translator()
        translator = DeepLTranslator(api_key="")
        assert not translator.is_configured()
        with pytest.raises(ConfigurationError) as exc_info:
            await translator.translate("Hello", "en", "ja")
        assert "API key not configured" in str(exc_info.value)
        assert exc_info.value.code is ErrorCode.NOT_CONFIGURED

    def test_classified_error(self) -> None:
        error = StubTranslator().classified_error("Too many requests", "429")
        assert isinstance(error, TranslationError)
        assert error.code is ErrorCode.RATE_LIMITED
        assert error.provider == "stub"
        assert error.record is not None
        assert error.user_message == "Too many requests, please retry later"
        assert str(error) == "Stub: Too many requests"


class TestGoogleFreeTranslator:
    """Test GoogleFreeTranslator."""

    def test_keyless(self) -> None:
        translator = GoogleFreeTranslator()
        assert translator.is_configured()

    def test_language_codes(self) -> None:
        assert google_language_code("zh") == "zh-CN"
        assert google_language_code("he") == "iw"
        assert google_language_code("ja") == "ja"

    def test_pacific_languages_unsupported(self) -> None:
        assert not GoogleFreeTranslator().descriptor.supports_language("haw")

    @pytest.mark.asyncio
    async def test_translate_mocked(self) -> None:
        """Test translate with mocked sync function."""
        translator = GoogleFreeTranslator()

        with patch.object(translator, "_translate_sync", return_value="こんにちは"):
            result = await translator.translate("Hello", "en", "ja")
            assert result == "こんにちは"

    def test_translate_sync_uses_web_codes(self) -> None:
        translator = GoogleFreeTranslator()

        with patch(
            "content_translator.translators.google_free.DeepGoogleTranslator"
        ) as mock_class:
            mock_class.return_value.translate.return_value = "Hello"
            assert translator._translate_sync("你好", "zh", "en") == "Hello"
            mock_class.assert_called_once_with(source="zh-CN", target="en")

    def test_translate_sync_rate_limit(self) -> None:
        translator = GoogleFreeTranslator()

        with patch(
            "content_translator.translators.google_free.DeepGoogleTranslator"
        ) as mock_class:
            mock_class.return_value.translate.side_effect = TooManyRequests()
            with pytest.raises(TranslationError) as exc_info:
                translator._translate_sync("Hello", "en", "ja")
            assert exc_info.value.code is ErrorCode.RATE_LIMITED

    def test_translate_sync_error_handling(self) -> None:
        """_translate_sync should wrap exceptions in a classified TranslationError."""
        translator = GoogleFreeTranslator()

        with patch(
            "content_translator.translators.google_free.DeepGoogleTranslator"
        ) as mock_class:
            mock_class.return_value.translate.side_effect = Exception("connection aborted")
            with pytest.raises(TranslationError) as exc_info:
                translator._translate_sync("Hello", "en", "ja")
            assert exc_info.value.code is ErrorCode.NETWORK_ERROR
            assert "connection aborted" in str(exc_info.value)

    def test_translate_sync_empty_result(self) -> None:
        translator = GoogleFreeTranslator()

        with patch(
            "content_translator.translators.google_free.DeepGoogleTranslator"
        ) as mock_class:
            mock_class.return_value.translate.return_value = ""
            with pytest.raises(TranslationError) as exc_info:
                translator._translate_sync("Hello", "en", "ja")
            assert exc_info.value.code is ErrorCode.NO_RESULT


@pytest.mark.skipif(
    os.environ.get("RUN_INTEGRATION") != "1",
    reason="Integration tests disabled (set RUN_INTEGRATION=1 to run)",
)
class TestGoogleFreeTranslatorIntegration:
    """Integration tests for GoogleFreeTranslator (real API).

    These tests require network access and call the real Google Translate API.
    Run with: RUN_INTEGRATION=1 pytest tests/test_translators.py
    """

    @pytest.mark.asyncio
    async def test_real_translation_en_to_ja(self) -> None:
        translator = GoogleFreeTranslator()
        result = await translator.translate("Hello", "en", "ja")
        assert result != "Hello"
        assert len(result) > 0

    @pytest.mark.asyncio
    async def test_real_translation_zh_to_en(self) -> None:
        translator = GoogleFreeTranslator()
        result = await translator.translate("你好", "zh", "en")
        assert result != "你好"
        assert len(result) > 0


class TestCreateTranslator:
    """Tests for create_translator()."""

    def test_default_provider(self) -> None:
        translator = create_translator(TranslationConfig())
        assert isinstance(translator, GoogleFreeTranslator)

    @pytest.mark.parametrize("provider", sorted(PROVIDERS))
    def test_every_provider_builds(self, provider: str) -> None:
        translator = create_translator(TranslationConfig(provider=provider, api_key="test-key"))
        assert translator.name == provider

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            create_translator(TranslationConfig(provider="babelfish"))
        assert "Unknown translation provider" in str(exc_info.value)

    def test_enabled_languages_passed(self) -> None:
        config = TranslationConfig(provider="deepl", api_key="k", enabled_languages=("ja",))
        translator = create_translator(config)
        assert translator.descriptor.supported_languages == frozenset({"zh", "en", "ja"})

    def test_auth_override_passed(self) -> None:
        config = TranslationConfig(
            provider="openai", api_key="k", auth_type="custom", custom_auth_header="X-Token"
        )
        translator = create_translator(config)
        assert translator.descriptor.auth == AuthScheme.header("X-Token")

    def test_litellm_model_split(self) -> None:
        config = TranslationConfig(provider="litellm", api_key="k", model="openai/gpt-4o")
        translator = create_translator(config)
        assert translator.model == "openai/gpt-4o"  # type: ignore[attr-defined]

    def test_litellm_timeout_passed(self) -> None:
        config = TranslationConfig(provider="litellm", api_key="k", timeout=30.0)
        translator = create_translator(config)
        assert translator._llm_config.timeout == 30.0  # type: ignore[attr-defined]

    def test_libretranslate_keyless(self) -> None:
        translator = create_translator(TranslationConfig(provider="libretranslate"))
        assert translator.is_configured()


class TestLazyImports:
    """Test lazy import functions."""

    @pytest.mark.parametrize(
        ("getter", "class_name"),
        [
            (get_deepl_translator, "DeepLTranslator"),
            (get_google_translator, "GoogleTranslator"),
            (get_openai_translator, "OpenAITranslator"),
            (get_claude_translator, "ClaudeTranslator"),
            (get_gemini_translator, "GeminiTranslator"),
            (get_mymemory_translator, "MyMemoryTranslator"),
            (get_libretranslate_translator, "LibreTranslateTranslator"),
            (get_litellm_translator, "LiteLLMTranslator"),
        ],
    )
    def test_getter_returns_class(self, getter: object, class_name: str) -> None:
        assert getter().__name__ == class_name  # type: ignore[operator]
