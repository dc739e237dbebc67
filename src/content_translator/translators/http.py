# SPDX-License-Identifier: Apache-2.0
"""Shared aiohttp plumbing for REST translation backends."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import aiohttp

from content_translator.translators.base import (
    AuthScheme,
    BaseTranslator,
    ErrorCode,
    TranslationError,
)

logger = logging.getLogger(__name__)


def provider_endpoint(base_url: str | None, default_url: str, path: str | None = None) -> str:
    """Join a (possibly custom) base URL with an API path.

    Custom base URLs let OpenAI-compatible services stand in for the
    default host.

    Args:
        base_url: Custom base URL, or None for the default.
        default_url: Provider default base URL.
        path: Optional API path.

    Returns:
        Full endpoint URL.
    """
    base = (base_url or default_url).rstrip("/")
    if not path:
        return base
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"


class HTTPTranslator(BaseTranslator):
    """Backend talking to a REST/JSON endpoint through aiohttp.

    The session is created lazily and may be managed with ``async with``.
    Exactly one request is made per call; nothing is retried here.
    """

    def __init__(
        self,
        api_key: str | None = None,
        enabled_languages: Iterable[str] | None = None,
        auth: AuthScheme | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_key=api_key, enabled_languages=enabled_languages, auth=auth)
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> HTTPTranslator:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            kwargs: dict[str, Any] = {}
            if self._timeout:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    def _auth_parts(self) -> tuple[dict[str, str], dict[str, str]]:
        headers: dict[str, str] = {}
        params: dict[str, str] = {}
        self.descriptor.auth.apply(self._api_key, headers, params)
        return headers, params

    def _parse_error(self, payload: Any, status: int) -> tuple[str, str]:
        """Extract (message, code) from an error body.

        Handles the common ``{"error": {...}}`` and ``{"message": ...}``
        shapes; adapters override for anything else.
        """
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                message = error.get("message") or "Translation failed"
                code = error.get("status") or error.get("type") or error.get("code") or status
                return str(message), str(code)
            if isinstance(error, str):
                return error, str(status)
            if payload.get("message"):
                return str(payload["message"]), str(status)
        if isinstance(payload, str) and payload:
            return payload, str(status)
        return f"HTTP {status}", str(status)

    async def _read_error(self, response: aiohttp.ClientResponse) -> tuple[str, str]:
        try:
            payload: Any = await response.json(content_type=None)
        except ValueError:
            payload = await response.text()
        return self._parse_error(payload, response.status)

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        data: Any = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue one authenticated request and decode the JSON reply.

        Raises:
            TranslationError: On HTTP errors (classified), network failures,
                timeouts or undecodable replies.
        """
        session = await self._ensure_session()
        auth_headers, auth_params = self._auth_parts()
        request_headers = {**(headers or {}), **auth_headers}
        request_params = {**(params or {}), **auth_params}
        send = session.post if method.upper() == "POST" else session.get

        try:
            async with send(
                url,
                json=json,
                data=data,
                params=request_params or None,
                headers=request_headers,
            ) as response:
                if response.status >= 400:
                    message, code = await self._read_error(response)
                    logger.debug(
                        "%s returned HTTP %d (%s): %s",
                        self.name,
                        response.status,
                        code,
                        message,
                    )
                    raise self.classified_error(message, code)
                return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise TranslationError(
                f"{self.descriptor.display_name} request timed out",
                code=ErrorCode.TIMEOUT,
                provider=self.name,
            ) from e
        except aiohttp.ClientError as e:
            raise self.classified_error(
                f"request failed: {e}", ErrorCode.NETWORK_ERROR.value
            ) from e
        except ValueError as e:
            raise TranslationError(
                f"{self.descriptor.display_name} returned an unreadable response",
                code=ErrorCode.NO_RESULT,
                provider=self.name,
            ) from e

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
