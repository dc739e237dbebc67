# SPDX-License-Identifier: Apache-2.0
"""Translation settings loaded from the admin settings JSON or the environment."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from content_translator.translators.base import AuthScheme, ConfigurationError
from content_translator.translators.languages import normalize_enabled_languages

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "google-free"

# Header placements offered by the settings page; "custom" takes the header
# name from custom_auth_header, "query" the parameter name.
AUTH_HEADERS = {
    "x-api-key": "x-api-key",
    "x-goog-api-key": "x-goog-api-key",
    "api-key": "api-key",
}
AUTH_TYPES = ("bearer", *AUTH_HEADERS, "custom", "query", "none")

# settings JSON key -> field name
_SETTINGS_KEYS = {
    "provider": "provider",
    "apiKey": "api_key",
    "model": "model",
    "baseUrl": "base_url",
    "apiUrl": "api_url",
    "email": "email",
    "enabledLanguages": "enabled_languages",
    "authType": "auth_type",
    "customAuthHeader": "custom_auth_header",
    "timeout": "timeout",
    "locale": "locale",
}


@dataclass
class TranslationConfig:
    """Backend selection and credentials.

    Attributes:
        provider: Backend name ("google-free", "deepl", "openai", ...).
        api_key: Provider API key.
        model: Model id for LLM providers ("provider/model" for litellm).
        base_url: Custom base URL for OpenAI-compatible/LLM endpoints.
        api_url: Custom endpoint for DeepL, Google Cloud or MyMemory.
        email: Contact email for MyMemory.
        enabled_languages: Languages enabled in settings; zh and en are
            always included.
        auth_type: Credential placement override (see AUTH_TYPES).
        custom_auth_header: Header or parameter name for "custom"/"query".
        timeout: Total request timeout in seconds.
        locale: Locale of user-facing error messages ("en", "zh").
    """

    provider: str = DEFAULT_PROVIDER
    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    api_url: str | None = None
    email: str | None = None
    enabled_languages: tuple[str, ...] = field(
        default_factory=lambda: normalize_enabled_languages(None)
    )
    auth_type: str | None = None
    custom_auth_header: str | None = None
    timeout: float | None = None
    locale: str = "en"

    def __post_init__(self) -> None:
        self.provider = self.provider.strip().lower()
        self.enabled_languages = normalize_enabled_languages(
            list(self.enabled_languages) if self.enabled_languages is not None else None
        )
        if self.auth_type is not None:
            self.auth_type = self.auth_type.strip().lower()
            if self.auth_type not in AUTH_TYPES:
                raise ConfigurationError(
                    f"Unknown auth type '{self.auth_type}'. "
                    f"Choose from: {', '.join(AUTH_TYPES)}"
                )

    def auth_scheme(self) -> AuthScheme | None:
        """Credential placement override, or None for the provider default.

        Raises:
            ConfigurationError: If "custom" is chosen without a header name.
        """
        if self.auth_type is None:
            return None
        if self.auth_type == "bearer":
            return AuthScheme.bearer()
        if self.auth_type == "none":
            return AuthScheme()
        if self.auth_type == "query":
            return AuthScheme.query(self.custom_auth_header or "key")
        if self.auth_type == "custom":
            if not self.custom_auth_header:
                raise ConfigurationError(
                    "Custom auth type requires a header name (custom_auth_header)"
                )
            return AuthScheme.header(self.custom_auth_header)
        return AuthScheme.header(AUTH_HEADERS[self.auth_type])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TranslationConfig:
        """Build from the settings JSON shape.

        Accepts the camelCase keys stored by the admin frontend as well as
        the field names themselves. Unknown keys are ignored.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _SETTINGS_KEYS.get(key, key)
            if name in cls.__dataclass_fields__ and value not in (None, ""):
                kwargs[name] = value
        if "enabled_languages" in kwargs:
            kwargs["enabled_languages"] = tuple(kwargs["enabled_languages"])
        if "timeout" in kwargs:
            kwargs["timeout"] = float(kwargs["timeout"])
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> TranslationConfig:
        """Load a settings JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} must contain a JSON object")
        # Settings pages store translation config under a "translation" key.
        section = data.get("translation", data)
        return cls.from_dict(section)

    @classmethod
    def from_env(
        cls,
        provider: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> TranslationConfig:
        """Build from environment variables.

        ``.env`` is loaded first when reading the process environment.
        Variables: ``TRANSLATION_PROVIDER``, ``<PROVIDER>_API_KEY``,
        ``<PROVIDER>_MODEL``, ``<PROVIDER>_BASE_URL``, ``<PROVIDER>_API_URL``,
        ``TRANSLATION_LANGUAGES`` (comma separated), ``TRANSLATION_TIMEOUT``.
        The provider prefix is upper-cased with dashes as underscores,
        e.g. ``GOOGLE_FREE``.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        name = (provider or env.get("TRANSLATION_PROVIDER") or DEFAULT_PROVIDER).lower()
        prefix = name.upper().replace("-", "_")

        languages = env.get("TRANSLATION_LANGUAGES")
        timeout = env.get("TRANSLATION_TIMEOUT")
        config = cls(
            provider=name,
            api_key=env.get(f"{prefix}_API_KEY") or None,
            model=env.get(f"{prefix}_MODEL") or None,
            base_url=env.get(f"{prefix}_BASE_URL") or None,
            api_url=env.get(f"{prefix}_API_URL") or None,
            email=env.get(f"{prefix}_EMAIL") or None,
            enabled_languages=(
                tuple(code.strip() for code in languages.split(",") if code.strip())
                if languages
                else normalize_enabled_languages(None)
            ),
            timeout=float(timeout) if timeout else None,
            locale=env.get("TRANSLATION_LOCALE") or "en",
        )
        logger.debug("Loaded %s configuration from environment", config.provider)
        return config
