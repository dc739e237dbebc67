# SPDX-License-Identifier: Apache-2.0
"""Translation pipeline package."""

from .batch import BatchCoordinator, BatchOutcome, BatchStatus
from .context import TranslationContext
from .errors import BatchTranslationError, PipelineError
from .progress import ProgressCallback
from .service import ArticleFields, TranslationService

__all__ = [
    "ArticleFields",
    "BatchCoordinator",
    "BatchOutcome",
    "BatchStatus",
    "BatchTranslationError",
    "PipelineError",
    "ProgressCallback",
    "TranslationContext",
    "TranslationService",
]
