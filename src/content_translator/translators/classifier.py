# SPDX-License-Identifier: Apache-2.0
"""Classification of raw backend errors into the stable error taxonomy.

Pure lookups, no I/O. Resolution order:

1. exact lookup of the raw error code
2. provider-specific message substrings
3. generic message heuristics
4. fallback to ``UNKNOWN``
"""

from __future__ import annotations

from dataclasses import dataclass

from content_translator.translators.base import RETRYABLE_CODES, ErrorCode

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class ErrorRecord:
    """A backend error mapped onto the taxonomy."""

    raw_message: str
    raw_code: str | None
    provider: str | None
    classified_code: ErrorCode
    user_message: str
    suggestion: str
    retryable: bool


# Raw codes seen from providers and HTTP, mapped to the taxonomy.
# TRANSLATION_ERROR / PROVIDER_ERROR are deliberately absent: they carry no
# information and are resolved from the message instead.
CODE_TABLE: dict[str, ErrorCode] = {
    **{code.value: code for code in ErrorCode},
    # Legacy aliases
    "RATE_LIMIT": ErrorCode.RATE_LIMITED,
    "INVALID_RESPONSE": ErrorCode.NO_RESULT,
    # HTTP status codes
    "400": ErrorCode.BAD_REQUEST,
    "401": ErrorCode.UNAUTHORIZED,
    "403": ErrorCode.UNAUTHORIZED,
    "408": ErrorCode.TIMEOUT,
    "413": ErrorCode.CONTENT_TOO_LONG,
    "429": ErrorCode.RATE_LIMITED,
    "456": ErrorCode.RATE_LIMITED,
    "500": ErrorCode.UNAVAILABLE,
    "502": ErrorCode.UNAVAILABLE,
    "503": ErrorCode.UNAVAILABLE,
    "504": ErrorCode.TIMEOUT,
    "529": ErrorCode.UNAVAILABLE,
    # Google / Gemini status names
    "INVALID_ARGUMENT": ErrorCode.BAD_REQUEST,
    "FAILED_PRECONDITION": ErrorCode.BAD_REQUEST,
    "UNAUTHENTICATED": ErrorCode.UNAUTHORIZED,
    "PERMISSION_DENIED": ErrorCode.UNAUTHORIZED,
    "RESOURCE_EXHAUSTED": ErrorCode.RATE_LIMITED,
    "DEADLINE_EXCEEDED": ErrorCode.TIMEOUT,
    "INTERNAL": ErrorCode.UNAVAILABLE,
    # Claude error types
    "invalid_request_error": ErrorCode.BAD_REQUEST,
    "authentication_error": ErrorCode.UNAUTHORIZED,
    "permission_error": ErrorCode.UNAUTHORIZED,
    "rate_limit_error": ErrorCode.RATE_LIMITED,
    "request_too_large": ErrorCode.CONTENT_TOO_LONG,
    "api_error": ErrorCode.UNAVAILABLE,
    "overloaded_error": ErrorCode.UNAVAILABLE,
    # OpenAI error codes
    "invalid_api_key": ErrorCode.UNAUTHORIZED,
    "rate_limit_exceeded": ErrorCode.RATE_LIMITED,
    "insufficient_quota": ErrorCode.RATE_LIMITED,
    "context_length_exceeded": ErrorCode.CONTENT_TOO_LONG,
    "content_filter": ErrorCode.CONTENT_BLOCKED,
    "content_policy_violation": ErrorCode.CONTENT_BLOCKED,
    "server_error": ErrorCode.UNAVAILABLE,
}

PROVIDER_PATTERNS: dict[str, dict[str, ErrorCode]] = {
    "gemini": {
        "the model is overloaded": ErrorCode.UNAVAILABLE,
        "overloaded": ErrorCode.UNAVAILABLE,
        "quota exceeded": ErrorCode.RATE_LIMITED,
        "api key not valid": ErrorCode.UNAUTHORIZED,
        "invalid api key": ErrorCode.UNAUTHORIZED,
        "invalid request": ErrorCode.BAD_REQUEST,
        "content filtered": ErrorCode.CONTENT_BLOCKED,
        "safety": ErrorCode.CONTENT_BLOCKED,
    },
    "openai": {
        "server is overloaded": ErrorCode.UNAVAILABLE,
        "rate limit": ErrorCode.RATE_LIMITED,
        "invalid api key": ErrorCode.UNAUTHORIZED,
        "incorrect api key": ErrorCode.UNAUTHORIZED,
        "bad request": ErrorCode.BAD_REQUEST,
        "content policy": ErrorCode.CONTENT_BLOCKED,
        "context length exceeded": ErrorCode.CONTENT_TOO_LONG,
        "maximum context length": ErrorCode.CONTENT_TOO_LONG,
    },
    "claude": {
        "overloaded": ErrorCode.UNAVAILABLE,
        "rate limit": ErrorCode.RATE_LIMITED,
        "invalid x-api-key": ErrorCode.UNAUTHORIZED,
        "prompt is too long": ErrorCode.CONTENT_TOO_LONG,
        "credit balance is too low": ErrorCode.RATE_LIMITED,
    },
    "deepl": {
        "quota exceeded": ErrorCode.RATE_LIMITED,
        "too many requests": ErrorCode.RATE_LIMITED,
        "wrong endpoint": ErrorCode.BAD_REQUEST,
        "authorization failure": ErrorCode.UNAUTHORIZED,
    },
    "mymemory": {
        "mymemory warning": ErrorCode.RATE_LIMITED,
        "invalid language pair": ErrorCode.UNSUPPORTED_LANGUAGE,
        "query length limit exceeded": ErrorCode.CONTENT_TOO_LONG,
    },
}

# (code, substrings) checked in order against the lowercased message.
GENERIC_HEURISTICS: tuple[tuple[ErrorCode, tuple[str, ...]], ...] = (
    (ErrorCode.UNAVAILABLE, ("overload", "unavailable", "busy", "503")),
    (ErrorCode.RATE_LIMITED, ("rate limit", "429", "quota", "too many")),
    (ErrorCode.UNAUTHORIZED, ("unauthorized", "401", "invalid key", "api key")),
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.NETWORK_ERROR, ("network", "connection", "fetch")),
)

# (message, suggestion) per locale and code.
MESSAGES: dict[str, dict[ErrorCode, tuple[str, str]]] = {
    "en": {
        ErrorCode.NOT_CONFIGURED: (
            "Translation service is not configured",
            "Configure the translation API key in settings",
        ),
        ErrorCode.UNSUPPORTED_LANGUAGE: (
            "Language pair is not supported by this translation service",
            "Choose another language or switch translation service",
        ),
        ErrorCode.RATE_LIMITED: (
            "Too many requests, please retry later",
            "Wait for the quota to reset or lower the request rate",
        ),
        ErrorCode.UNAUTHORIZED: (
            "API key is invalid or expired",
            "Check the API key configured in settings",
        ),
        ErrorCode.UNAVAILABLE: (
            "Translation service is busy, please retry later",
            "The service is overloaded; try again in a few minutes",
        ),
        ErrorCode.BAD_REQUEST: (
            "Malformed translation request",
            "Check the translation settings and content format",
        ),
        ErrorCode.CONTENT_TOO_LONG: (
            "Content is too long to translate",
            "Translate the content in smaller sections",
        ),
        ErrorCode.CONTENT_BLOCKED: (
            "Content was blocked by the provider's safety policy",
            "Check whether the content contains sensitive material",
        ),
        ErrorCode.NETWORK_ERROR: (
            "Network connection error",
            "Check the network connection and retry",
        ),
        ErrorCode.TIMEOUT: (
            "Request timed out",
            "The connection may be unstable; retry",
        ),
        ErrorCode.NO_RESULT: (
            "Translation service returned no result",
            "Retry, or switch translation service",
        ),
        ErrorCode.PARSE_MISMATCH: (
            "Batch translation reply could not be matched to its fields",
            "Fields are translated one by one instead",
        ),
        ErrorCode.UNKNOWN: (
            "Translation failed",
            "Check the network connection and API configuration",
        ),
    },
    "zh": {
        ErrorCode.NOT_CONFIGURED: ("翻译服务未配置", "请在设置中配置翻译API密钥"),
        ErrorCode.UNSUPPORTED_LANGUAGE: ("该翻译服务不支持此语言", "请选择其他语言或更换翻译服务"),
        ErrorCode.RATE_LIMITED: ("请求频率过高，请稍后重试", "请降低请求频率或等待配额重置"),
        ErrorCode.UNAUTHORIZED: ("API密钥无效或已过期", "请检查设置中的API密钥配置"),
        ErrorCode.UNAVAILABLE: ("翻译服务当前繁忙，请稍后重试", "建议等待几分钟后再次尝试"),
        ErrorCode.BAD_REQUEST: ("请求格式错误", "请检查翻译设置和内容格式"),
        ErrorCode.CONTENT_TOO_LONG: ("翻译内容过长", "请分段翻译或减少内容长度"),
        ErrorCode.CONTENT_BLOCKED: ("内容被安全策略阻止", "请检查内容是否包含敏感信息"),
        ErrorCode.NETWORK_ERROR: ("网络连接错误", "请检查网络连接后重试"),
        ErrorCode.TIMEOUT: ("请求超时", "网络连接可能不稳定，请重试"),
        ErrorCode.NO_RESULT: ("翻译服务未返回结果", "请重试或更换翻译服务"),
        ErrorCode.PARSE_MISMATCH: ("批量翻译结果无法对应字段", "已改为逐个字段翻译"),
        ErrorCode.UNKNOWN: ("翻译失败", "请检查网络连接和API配置"),
    },
}

SUGGESTION_LABELS = {"en": "Hint", "zh": "提示"}


def _resolve(message: str, code: str | None, provider: str | None) -> ErrorCode:
    if code is not None and str(code) in CODE_TABLE:
        return CODE_TABLE[str(code)]

    lowered = message.lower()
    if provider:
        for pattern, mapped in PROVIDER_PATTERNS.get(provider.lower(), {}).items():
            if pattern in lowered:
                return mapped

    for mapped, needles in GENERIC_HEURISTICS:
        if any(needle in lowered for needle in needles):
            return mapped

    return ErrorCode.UNKNOWN


def classify(
    message: str,
    code: str | int | None = None,
    provider: str | None = None,
    locale: str = DEFAULT_LOCALE,
) -> ErrorRecord:
    """Map a raw backend error to the taxonomy.

    Args:
        message: Raw error message from the backend.
        code: Raw error code (HTTP status, provider status or type).
        provider: Backend name, enabling provider-specific patterns.
        locale: Locale for the user-facing message ("en", "zh").

    Returns:
        The classified error record.
    """
    raw_code = None if code is None else str(code)
    classified = _resolve(message or "", raw_code, provider)
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    user_message, suggestion = catalog[classified]
    return ErrorRecord(
        raw_message=message,
        raw_code=raw_code,
        provider=provider,
        classified_code=classified,
        user_message=user_message,
        suggestion=suggestion,
        retryable=classified in RETRYABLE_CODES,
    )


def format_error_message(
    message: str,
    code: str | int | None = None,
    provider: str | None = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Render the classified message followed by a suggestion line."""
    record = classify(message, code, provider, locale)
    label = SUGGESTION_LABELS.get(locale, SUGGESTION_LABELS[DEFAULT_LOCALE])
    return f"{record.user_message}\n{label}: {record.suggestion}"
