# SPDX-License-Identifier: Apache-2.0
"""Static model price tables for usage cost estimates."""

from __future__ import annotations

from content_translator.core.models import Usage

CURRENCY = "USD"

# (input, output) price in USD per 1M tokens
PRICING: dict[str, dict[str, tuple[float, float]]] = {
    "openai": {
        "gpt-3.5-turbo": (0.50, 1.50),
        "gpt-4o-mini": (0.15, 0.60),
        "gpt-4o": (2.50, 10.00),
        "gpt-4-turbo": (10.00, 30.00),
        "gpt-4.1": (2.00, 8.00),
        "gpt-4.1-mini": (0.40, 1.60),
        "gpt-5-mini": (0.25, 2.00),
        "gpt-5-nano": (0.05, 0.40),
    },
    "claude": {
        "claude-3-5-sonnet-20241022": (3.00, 15.00),
        "claude-3-5-sonnet-20240620": (3.00, 15.00),
        "claude-3-5-haiku-20241022": (0.80, 4.00),
        "claude-3-opus-20240229": (15.00, 75.00),
        "claude-3-sonnet-20240229": (3.00, 15.00),
        "claude-3-haiku-20240307": (0.25, 1.25),
    },
    "gemini": {
        "gemini-1.5-flash": (0.075, 0.30),
        "gemini-1.5-flash-8b": (0.0375, 0.15),
        "gemini-1.5-pro": (3.50, 10.50),
        "gemini-1.0-pro": (0.50, 1.50),
    },
}

# Used when a configured model is missing from its provider's table.
FALLBACK_MODELS = {
    "openai": "gpt-4o-mini",
    "claude": "claude-3-5-sonnet-20241022",
    "gemini": "gemini-1.5-flash",
}


def model_price(provider: str, model: str) -> tuple[float, float]:
    """Look up per-1M-token prices, falling back to the provider default.

    Unknown providers are priced at zero.
    """
    table = PRICING.get(provider, {})
    if model in table:
        return table[model]
    fallback = FALLBACK_MODELS.get(provider)
    if fallback is None:
        return (0.0, 0.0)
    return table[fallback]


def estimate_usage(
    provider: str,
    model: str,
    input_tokens: int,
    output_tokens: int,
    total_tokens: int | None = None,
) -> Usage:
    """Build a Usage record with the estimated cost of one call."""
    input_price, output_price = model_price(provider, model)
    cost = (input_tokens / 1_000_000) * input_price + (output_tokens / 1_000_000) * output_price
    return Usage(
        input_units=input_tokens,
        output_units=output_tokens,
        total_units=total_tokens if total_tokens is not None else input_tokens + output_tokens,
        estimated_cost=cost,
        currency=CURRENCY,
    )
