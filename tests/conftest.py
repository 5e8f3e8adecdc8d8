"""Shared pytest fixtures for ringexpr tests."""

from __future__ import annotations

import pytest

from ringexpr.core.rings import IntRing


@pytest.fixture
def ring() -> IntRing:
    """Return the reference 64-bit integer ring."""
    return IntRing()


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep RINGEXPR_* variables from the developer's shell out of tests."""
    for name in ("RINGEXPR_RING", "RINGEXPR_LOG_LEVEL", "RINGEXPR_CARET"):
        monkeypatch.delenv(name, raising=False)
