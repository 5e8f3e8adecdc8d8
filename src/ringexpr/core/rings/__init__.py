"""
Rings available to the expression evaluator.

Usage:
    from ringexpr.core.rings import get_ring

    ring = get_ring("int")
    ring.add(ring.from_int(2), ring.from_int(3))  # IntElement(value=5)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ringexpr.core.rings.base import (
    NotInRingError,
    Ring,
    RingDivisionByZeroError,
    RingError,
    RingOverflowError,
)
from ringexpr.core.rings.integer import I64_MAX, I64_MIN, IntElement, IntRing

logger = logging.getLogger(__name__)


class UnknownRingError(ValueError):
    """No ring is registered under the requested name."""


_RINGS: dict[str, Callable[[], Ring[Any]]] = {
    IntRing.name: IntRing,
}


def register_ring(name: str, factory: Callable[[], Ring[Any]]) -> None:
    """Make a ring available by name (replaces any existing entry)."""
    if name in _RINGS:
        logger.debug("Replacing ring registration %r", name)
    _RINGS[name] = factory


def available_rings() -> list[str]:
    return sorted(_RINGS)


def get_ring(name: str) -> Ring[Any]:
    """Instantiate the ring registered under ``name``."""
    factory = _RINGS.get(name)
    if factory is None:
        raise UnknownRingError(
            f"Unknown ring: {name!r} (available: {', '.join(available_rings())})"
        )
    return factory()


__all__ = [
    "I64_MAX",
    "I64_MIN",
    "IntElement",
    "IntRing",
    "NotInRingError",
    "Ring",
    "RingDivisionByZeroError",
    "RingError",
    "RingOverflowError",
    "UnknownRingError",
    "available_rings",
    "get_ring",
    "register_ring",
]
