# SPDX-License-Identifier: Apache-2.0
"""Content-preserving translation for blog and CMS article text."""

from content_translator.config import TranslationConfig
from content_translator.core.models import TranslationRequest, TranslationResult, Usage
from content_translator.core.sanitizer import sanitize
from content_translator.pipeline.errors import BatchTranslationError, PipelineError
from content_translator.pipeline.service import ArticleFields, TranslationService
from content_translator.translators import create_translator
from content_translator.translators.base import (
    ConfigurationError,
    ErrorCode,
    TranslationError,
    TranslatorError,
)
from content_translator.translators.classifier import ErrorRecord
from content_translator.translators.classifier import classify as classify_error

__version__ = "0.1.0"

__all__ = [
    "ArticleFields",
    "BatchTranslationError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorRecord",
    "PipelineError",
    "TranslationConfig",
    "TranslationError",
    "TranslationRequest",
    "TranslationResult",
    "TranslationService",
    "TranslatorError",
    "Usage",
    "classify_error",
    "create_translator",
    "sanitize",
]
