# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from content_translator.core.models import TranslationResult

if TYPE_CHECKING:
    from content_translator.translators.classifier import ErrorRecord


class ErrorCode(str, Enum):
    """Stable error taxonomy shared by every backend."""

    NOT_CONFIGURED = "NOT_CONFIGURED"
    UNSUPPORTED_LANGUAGE = "UNSUPPORTED_LANGUAGE"
    RATE_LIMITED = "RATE_LIMITED"
    UNAUTHORIZED = "UNAUTHORIZED"
    UNAVAILABLE = "UNAVAILABLE"
    BAD_REQUEST = "BAD_REQUEST"
    CONTENT_TOO_LONG = "CONTENT_TOO_LONG"
    CONTENT_BLOCKED = "CONTENT_BLOCKED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    NO_RESULT = "NO_RESULT"
    PARSE_MISMATCH = "PARSE_MISMATCH"
    UNKNOWN = "UNKNOWN"


RETRYABLE_CODES = frozenset(
    {
        ErrorCode.RATE_LIMITED,
        ErrorCode.UNAVAILABLE,
        ErrorCode.NETWORK_ERROR,
        ErrorCode.TIMEOUT,
        ErrorCode.NO_RESULT,
        ErrorCode.PARSE_MISMATCH,
        ErrorCode.UNKNOWN,
    }
)


class TranslatorError(Exception):
    """Base exception for translator module.

    Attributes:
        code: Classified error code.
        provider: Name of the backend that failed.
        record: Full classification, when the error came from a backend reply.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        provider: str = "",
        record: ErrorRecord | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.provider = provider
        self.record = record

    @property
    def user_message(self) -> str:
        """Localized message for display."""
        if self.record is not None:
            return self.record.user_message
        return str(self)

    @property
    def retryable(self) -> bool:
        if self.record is not None:
            return self.record.retryable
        return self.code in RETRYABLE_CODES


class TranslationError(TranslatorError):
    """Error during translation (API call failure, rate limit, etc.).

    This error type is potentially retryable.
    """


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, invalid parameters, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    default_code = ErrorCode.NOT_CONFIGURED


class UnsupportedLanguageError(ConfigurationError):
    """Source or target language is outside the backend's supported set."""

    default_code = ErrorCode.UNSUPPORTED_LANGUAGE

    def __init__(self, source_lang: str, target_lang: str, provider: str = "") -> None:
        super().__init__(
            f"Unsupported language pair: {source_lang} -> {target_lang}",
            provider=provider,
        )
        self.source_lang = source_lang
        self.target_lang = target_lang


class QuotaExceededError(TranslationError):
    """Provider quota or rate limit exhausted."""

    default_code = ErrorCode.RATE_LIMITED


class ArrayLengthMismatchError(TranslationError):
    """A multi-input reply had a different number of items than requested."""

    default_code = ErrorCode.PARSE_MISMATCH

    def __init__(self, expected: int, actual: int, provider: str = "") -> None:
        super().__init__(
            f"Expected {expected} translations but got {actual}",
            provider=provider,
        )
        self.expected = expected
        self.actual = actual


class AuthType(str, Enum):
    """Where a backend places its credential."""

    BEARER = "bearer"
    HEADER = "header"
    QUERY = "query"
    NONE = "none"


@dataclass(frozen=True)
class AuthScheme:
    """Credential placement for a provider.

    Attributes:
        type: Placement kind.
        name: Header or query parameter name (HEADER/QUERY).
        template: Value template for HEADER placement.
    """

    type: AuthType = AuthType.NONE
    name: str = ""
    template: str = "{key}"

    @classmethod
    def bearer(cls) -> AuthScheme:
        return cls(AuthType.BEARER, "Authorization", "Bearer {key}")

    @classmethod
    def header(cls, name: str, template: str = "{key}") -> AuthScheme:
        return cls(AuthType.HEADER, name, template)

    @classmethod
    def query(cls, name: str = "key") -> AuthScheme:
        return cls(AuthType.QUERY, name)

    def apply(
        self,
        api_key: str | None,
        headers: dict[str, str],
        params: dict[str, str],
    ) -> None:
        """Place the credential into outgoing headers or query parameters."""
        if not api_key or self.type is AuthType.NONE:
            return
        if self.type is AuthType.QUERY:
            params[self.name] = api_key
        else:
            headers[self.name] = self.template.format(key=api_key)


class Capability(str, Enum):
    """Optional backend capabilities."""

    USAGE = "usage"
    NATIVE_BATCH = "native-batch"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of a configured provider."""

    name: str
    display_name: str
    supported_languages: frozenset[str]
    auth: AuthScheme = field(default_factory=AuthScheme)
    capabilities: frozenset[Capability] = frozenset()

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def supports_language(self, lang_code: str) -> bool:
        return lang_code in self.supported_languages


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for translation backends.

    All translator implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Backend name ("google", "deepl", "openai", ...)."""
        ...

    @property
    def descriptor(self) -> ProviderDescriptor:
        """Provider description including capabilities."""
        ...

    def is_configured(self) -> bool:
        """Whether credentials required for a call are present."""
        ...

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text.

        Args:
            text: Text to translate.
            source_lang: Source language code ("en", "zh", ...).
            target_lang: Target language code.

        Returns:
            Translated text.

        Raises:
            ConfigurationError: If not configured or languages unsupported.
            TranslationError: On translation failure.
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


@runtime_checkable
class UsageReportingBackend(TranslatorBackend, Protocol):
    """Backend that can report token usage (Capability.USAGE)."""

    async def translate_with_usage(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> TranslationResult: ...


@runtime_checkable
class NativeBatchBackend(TranslatorBackend, Protocol):
    """Backend with true multi-input requests (Capability.NATIVE_BATCH)."""

    async def native_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]: ...


class BaseTranslator:
    """Shared behavior for backend adapters.

    Subclasses set the class attributes and implement ``_translate``.
    Configuration and language checks run before any network call.
    """

    NAME: ClassVar[str] = ""
    DISPLAY_NAME: ClassVar[str] = ""
    LANGUAGES: ClassVar[frozenset[str]] = frozenset()
    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset()
    DEFAULT_AUTH: ClassVar[AuthScheme] = AuthScheme()
    REQUIRES_API_KEY: ClassVar[bool] = True

    def __init__(
        self,
        api_key: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        auth: AuthScheme | None = None,
    ) -> None:
        self._api_key = api_key or None
        languages = self.LANGUAGES
        if enabled_languages is not None:
            languages = languages & frozenset(enabled_languages)
        self._descriptor = ProviderDescriptor(
            name=self.NAME,
            display_name=self.DISPLAY_NAME or self.NAME,
            supported_languages=languages,
            auth=auth or self.DEFAULT_AUTH,
            capabilities=self.CAPABILITIES,
        )

    @property
    def name(self) -> str:
        """Return backend name."""
        return self._descriptor.name

    @property
    def descriptor(self) -> ProviderDescriptor:
        return self._descriptor

    def is_configured(self) -> bool:
        return bool(self._api_key) or not self.REQUIRES_API_KEY

    def check_ready(self, source_lang: str, target_lang: str) -> None:
        """Validate configuration and language pair.

        Raises:
            ConfigurationError: If the backend lacks credentials.
            UnsupportedLanguageError: If either language is unsupported.
        """
        if not self.is_configured():
            raise ConfigurationError(
                f"{self._descriptor.display_name} API key not configured",
                provider=self.name,
            )
        descriptor = self._descriptor
        if not (
            descriptor.supports_language(source_lang)
            and descriptor.supports_language(target_lang)
        ):
            raise UnsupportedLanguageError(source_lang, target_lang, provider=self.name)

    def classified_error(
        self,
        message: str,
        code: str | None = None,
        error_type: type[TranslatorError] = TranslationError,
    ) -> TranslatorError:
        """Build a typed error from a raw provider message and code."""
        from content_translator.translators.classifier import classify

        record = classify(message, code, self.name)
        return error_type(
            f"{self._descriptor.display_name}: {message}",
            code=record.classified_code,
            provider=self.name,
            record=record,
        )

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text.

        Empty or whitespace-only text is returned as-is without a call.
        """
        self.check_ready(source_lang, target_lang)
        if not text or not text.strip():
            return text
        return await self._translate(text, source_lang, target_lang)

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        raise NotImplementedError

    async def close(self) -> None:
        """Release network resources."""


class UsageTranslator(BaseTranslator):
    """Base for LLM backends that report token usage.

    Subclasses implement ``_translate_with_usage``; plain ``translate`` shares
    the same single request.
    """

    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.USAGE})

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        result = await self._translate_with_usage(text, source_lang, target_lang)
        return result.translated_text

    async def translate_with_usage(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> TranslationResult:
        """Translate and report token usage with estimated cost."""
        self.check_ready(source_lang, target_lang)
        if not text or not text.strip():
            return TranslationResult(translated_text=text)
        return await self._translate_with_usage(text, source_lang, target_lang)

    async def _translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        raise NotImplementedError
