# SPDX-License-Identifier: Apache-2.0
"""LLM access through LiteLLM.

Requires optional dependency: litellm
"""

from content_translator.llm.client import LLMClient, LLMConfig, LLMResponse

__all__ = [
    "LLMConfig",
    "LLMClient",
    "LLMResponse",
]
