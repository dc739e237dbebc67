# SPDX-License-Identifier: Apache-2.0
"""Stub backends and HTTP mocks shared by the tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar
from unittest.mock import AsyncMock, MagicMock

from content_translator.core.models import TranslationResult, Usage
from content_translator.translators.base import (
    BaseTranslator,
    Capability,
    TranslationError,
)


class StubTranslator(BaseTranslator):
    """Backend applying a local function; records every text it receives."""

    NAME = "stub"
    DISPLAY_NAME = "Stub"
    LANGUAGES = frozenset({"en", "zh", "ja", "de"})
    REQUIRES_API_KEY = False

    def __init__(self, transform: Callable[[str], str] = str.upper, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.transform = transform
        self.calls: list[str] = []
        self.closed = False

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append(text)
        return self.transform(text)

    async def close(self) -> None:
        self.closed = True


class UsageStubTranslator(StubTranslator):
    """Stub reporting fixed usage."""

    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.USAGE})

    async def translate_with_usage(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        self.check_ready(source_lang, target_lang)
        self.calls.append(text)
        return TranslationResult(
            translated_text=self.transform(text),
            usage=Usage(input_units=10, output_units=12, total_units=22, estimated_cost=0.5),
        )


class NativeBatchStubTranslator(StubTranslator):
    """Stub with list-in/list-out batching."""

    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.NATIVE_BATCH})

    def __init__(self, transform: Callable[[str], str] = str.upper, drop_last: bool = False) -> None:
        super().__init__(transform)
        self.drop_last = drop_last
        self.batches: list[list[str]] = []

    async def native_batch(self, texts: list[str], source_lang: str, target_lang: str) -> list[str]:
        self.check_ready(source_lang, target_lang)
        self.batches.append(list(texts))
        results = [self.transform(text) for text in texts]
        return results[:-1] if self.drop_last else results


def failing(message: str = "backend down") -> Callable[[str], str]:
    """Transform that always raises a TranslationError."""

    def transform(text: str) -> str:
        raise TranslationError(message, provider="stub")

    return transform


def reverse_lines(text: str) -> str:
    """Reverse every non-blank line, keeping line structure."""
    return "\n".join(line[::-1] if line.strip() else line for line in text.split("\n"))


def mock_http_session(
    payload: Any,
    status: int = 200,
    method: str = "post",
) -> MagicMock:
    """aiohttp session mock whose request context yields one response."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=payload)
    mock_response.text = AsyncMock(return_value=str(payload))

    mock_session = MagicMock()
    request = MagicMock(return_value=AsyncMock())
    request.return_value.__aenter__ = AsyncMock(return_value=mock_response)
    request.return_value.__aexit__ = AsyncMock(return_value=None)
    setattr(mock_session, method, request)
    mock_session.close = AsyncMock()
    return mock_session
