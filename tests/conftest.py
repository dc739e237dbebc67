# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures."""

from __future__ import annotations

import pytest

from .stubs import StubTranslator


@pytest.fixture
def stub() -> StubTranslator:
    return StubTranslator()
