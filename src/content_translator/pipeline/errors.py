# SPDX-License-Identifier: Apache-2.0
"""Pipeline error definitions."""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class BatchTranslationError(PipelineError):
    """Every per-field fallback of a batch failed.

    Attributes:
        errors: One error per field that was attempted.
    """

    def __init__(
        self,
        message: str,
        errors: list[Exception],
    ) -> None:
        super().__init__(message, stage="batch", cause=errors[-1] if errors else None)
        self.errors = errors
