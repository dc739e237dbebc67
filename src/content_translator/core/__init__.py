# SPDX-License-Identifier: Apache-2.0
"""Core text processing: protected span extraction, restoration and cleanup."""

from content_translator.core.extractor import extract, find_code_blocks
from content_translator.core.models import (
    ExtractionResult,
    ProtectedSpan,
    SpanKind,
    TranslationRequest,
    TranslationResult,
    Usage,
)
from content_translator.core.restorer import restore
from content_translator.core.sanitizer import sanitize, scrub_residue

__all__ = [
    "ExtractionResult",
    "ProtectedSpan",
    "SpanKind",
    "TranslationRequest",
    "TranslationResult",
    "Usage",
    "extract",
    "find_code_blocks",
    "restore",
    "sanitize",
    "scrub_residue",
]
