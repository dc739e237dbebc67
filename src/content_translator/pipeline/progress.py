# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for multi-field translation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    ``stage`` is "batch", "fallback" or an article stage ("summary" for
    title and summary, "content").
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
