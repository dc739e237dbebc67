# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

Backends for the keyless Google web endpoint, Google Cloud Translation,
DeepL, MyMemory, LibreTranslate, OpenAI (and compatible services), Claude,
Gemini and any model reachable through LiteLLM.

Usage:
    # Keyless Google Translate (always available)
    from content_translator.translators import GoogleFreeTranslator
    translator = GoogleFreeTranslator()
    result = await translator.translate("Hello", "en", "ja")

    # From configuration
    from content_translator.config import TranslationConfig
    from content_translator.translators import create_translator
    translator = create_translator(TranslationConfig(provider="deepl", api_key="..."))
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from content_translator.translators.base import (
    ArrayLengthMismatchError,
    AuthScheme,
    AuthType,
    Capability,
    ConfigurationError,
    ErrorCode,
    NativeBatchBackend,
    ProviderDescriptor,
    QuotaExceededError,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
    UnsupportedLanguageError,
    UsageReportingBackend,
)
from content_translator.translators.google_free import GoogleFreeTranslator

if TYPE_CHECKING:
    from content_translator.config import TranslationConfig

__all__ = [
    # Protocols, descriptors and exceptions
    "TranslatorBackend",
    "UsageReportingBackend",
    "NativeBatchBackend",
    "ProviderDescriptor",
    "Capability",
    "AuthScheme",
    "AuthType",
    "ErrorCode",
    "TranslatorError",
    "TranslationError",
    "ConfigurationError",
    "UnsupportedLanguageError",
    "QuotaExceededError",
    "ArrayLengthMismatchError",
    # Always available
    "GoogleFreeTranslator",
    # Lazy import functions
    "get_deepl_translator",
    "get_google_translator",
    "get_openai_translator",
    "get_claude_translator",
    "get_gemini_translator",
    "get_mymemory_translator",
    "get_libretranslate_translator",
    "get_litellm_translator",
    "create_translator",
    "PROVIDERS",
]


def get_deepl_translator() -> type:
    """Get DeepLTranslator class with lazy import.

    Returns:
        DeepLTranslator class.
    """
    from content_translator.translators.deepl import DeepLTranslator

    return DeepLTranslator


def get_google_translator() -> type:
    """Get the Google Cloud Translation backend class with lazy import."""
    from content_translator.translators.google import GoogleTranslator

    return GoogleTranslator


def get_openai_translator() -> type:
    """Get OpenAITranslator class with lazy import.

    This function imports OpenAITranslator only when called,
    avoiding import errors when openai package is not installed.

    Returns:
        OpenAITranslator class.

    Raises:
        ImportError: If openai package is not installed.
    """
    from content_translator.translators.openai import OpenAITranslator

    return OpenAITranslator


def get_claude_translator() -> type:
    from content_translator.translators.claude import ClaudeTranslator

    return ClaudeTranslator


def get_gemini_translator() -> type:
    from content_translator.translators.gemini import GeminiTranslator

    return GeminiTranslator


def get_mymemory_translator() -> type:
    from content_translator.translators.mymemory import MyMemoryTranslator

    return MyMemoryTranslator


def get_libretranslate_translator() -> type:
    from content_translator.translators.libretranslate import LibreTranslateTranslator

    return LibreTranslateTranslator


def get_litellm_translator() -> type:
    """Get LiteLLMTranslator class with lazy import.

    Raises:
        ImportError: If litellm is not installed (``pip install content-translator[llm]``).
    """
    from content_translator.translators.litellm import LiteLLMTranslator

    return LiteLLMTranslator


def _google_free(config: TranslationConfig) -> TranslatorBackend:
    return GoogleFreeTranslator(enabled_languages=config.enabled_languages)


def _google(config: TranslationConfig) -> TranslatorBackend:
    backend: TranslatorBackend = get_google_translator()(
        api_key=config.api_key,
        api_url=config.api_url,
        enabled_languages=config.enabled_languages,
        timeout=config.timeout,
    )
    return backend


def _deepl(config: TranslationConfig) -> TranslatorBackend:
    backend: TranslatorBackend = get_deepl_translator()(
        api_key=config.api_key,
        api_url=config.api_url,
        enabled_languages=config.enabled_languages,
        timeout=config.timeout,
    )
    return backend


def _mymemory(config: TranslationConfig) -> TranslatorBackend:
    backend: TranslatorBackend = get_mymemory_translator()(
        api_key=config.api_key,
        email=config.email,
        api_url=config.api_url,
        enabled_languages=config.enabled_languages,
        timeout=config.timeout,
    )
    return backend


def _libretranslate(config: TranslationConfig) -> TranslatorBackend:
    backend: TranslatorBackend = get_libretranslate_translator()(
        api_key=config.api_key,
        api_url=config.api_url,
        enabled_languages=config.enabled_languages,
        timeout=config.timeout,
    )
    return backend


def _llm_factory(getter: Callable[[], type]) -> Callable[[TranslationConfig], TranslatorBackend]:
    def build(config: TranslationConfig) -> TranslatorBackend:
        backend: TranslatorBackend = getter()(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            enabled_languages=config.enabled_languages,
            auth=config.auth_scheme(),
            timeout=config.timeout,
        )
        return backend

    return build


def _litellm(config: TranslationConfig) -> TranslatorBackend:
    from content_translator.llm.client import LLMConfig

    provider, _, model = (config.model or "").partition("/")
    llm_config = LLMConfig(
        provider=provider or "gemini",
        model=model or None,
        api_key=config.api_key,
        api_base=config.base_url,
        timeout=config.timeout,
    )
    backend: TranslatorBackend = get_litellm_translator()(
        llm_config=llm_config,
        enabled_languages=config.enabled_languages,
    )
    return backend


PROVIDERS: dict[str, Callable[[TranslationConfig], TranslatorBackend]] = {
    "google-free": _google_free,
    "google": _google,
    "deepl": _deepl,
    "mymemory": _mymemory,
    "libretranslate": _libretranslate,
    "openai": _llm_factory(get_openai_translator),
    "claude": _llm_factory(get_claude_translator),
    "gemini": _llm_factory(get_gemini_translator),
    "litellm": _litellm,
}


def create_translator(config: TranslationConfig) -> TranslatorBackend:
    """Build the backend named by ``config.provider``.

    Args:
        config: Translation configuration.

    Returns:
        Configured backend instance.

    Raises:
        ConfigurationError: If the provider is unknown.
    """
    factory = PROVIDERS.get(config.provider)
    if factory is None:
        raise ConfigurationError(
            f"Unknown translation provider '{config.provider}'. "
            f"Available: {', '.join(sorted(PROVIDERS))}",
            provider=config.provider,
        )
    return factory(config)
