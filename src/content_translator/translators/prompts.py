# SPDX-License-Identifier: Apache-2.0
"""Prompt text shared by the LLM backends."""

from __future__ import annotations

from content_translator.translators.languages import english_name

DEFAULT_SYSTEM_PROMPT = (
    "You are a professional translator. Translate the following text from "
    "{source} to {target}. Maintain the original formatting, tone, and style. "
    "Keep every placeholder of the form ___PROTECT_NAME_N___ exactly as it is "
    "and keep empty lines where they are. "
    "Only provide the translation without any explanation or additional text."
)

BATCH_SYSTEM_PROMPT = (
    "You are a professional translator. Translate the given texts from "
    "{source} to {target} accurately while preserving the original meaning, "
    "tone, and formatting. Keep every placeholder of the form "
    "___PROTECT_NAME_N___ exactly as it is. "
    "Return only the translations without any explanations."
)


def system_prompt(source_lang: str, target_lang: str, template: str | None = None) -> str:
    """Render the single-text system prompt for a language pair.

    Custom templates may use ``{source}`` and ``{target}``; other braces are
    left alone.
    """
    return (
        (template or DEFAULT_SYSTEM_PROMPT)
        .replace("{source}", english_name(source_lang))
        .replace("{target}", english_name(target_lang))
    )


def batch_system_prompt(source_lang: str, target_lang: str) -> str:
    """Render the system prompt used for multi-text requests."""
    return BATCH_SYSTEM_PROMPT.format(
        source=english_name(source_lang),
        target=english_name(target_lang),
    )


def single_prompt(text: str, source_lang: str, target_lang: str) -> str:
    """Render a combined prompt for APIs without a separate system role."""
    return f"{system_prompt(source_lang, target_lang)}\n\nText to translate:\n{text}"


def output_token_cap(text: str, factor: int = 2, ceiling: int = 4000) -> int:
    """Output length cap scaled from the input length."""
    return max(1, min(len(text) * factor, ceiling))
