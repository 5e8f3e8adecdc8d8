"""
Reference ring: signed 64-bit integers with checked arithmetic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ringexpr.core.rings.base import (
    NotInRingError,
    RingDivisionByZeroError,
    RingOverflowError,
)

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class IntElement(BaseModel):
    """An element of the 64-bit integer ring."""

    value: int = Field(ge=I64_MIN, le=I64_MAX, description="Signed 64-bit value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


def _checked(value: int) -> IntElement:
    if value < I64_MIN or value > I64_MAX:
        raise RingOverflowError()
    return IntElement(value=value)


class IntRing:
    """Integers in ``[-2**63, 2**63 - 1]``.

    Sums, differences and products that leave the range raise
    ``RingOverflowError``. Division is exact or fails: a non-zero remainder
    raises ``NotInRingError``, a zero divisor raises
    ``RingDivisionByZeroError`` and ``I64_MIN / -1`` raises
    ``RingOverflowError``.
    """

    name = "int"

    def zero(self) -> IntElement:
        return IntElement(value=0)

    def from_int(self, value: int) -> IntElement:
        return _checked(value)

    def add(self, left: IntElement, right: IntElement) -> IntElement:
        return _checked(left.value + right.value)

    def sub(self, left: IntElement, right: IntElement) -> IntElement:
        return _checked(left.value - right.value)

    def mul(self, left: IntElement, right: IntElement) -> IntElement:
        return _checked(left.value * right.value)

    def div(self, left: IntElement, right: IntElement) -> IntElement:
        if right.value == 0:
            raise RingDivisionByZeroError()

        # Truncating remainder, so -5 / 2 is rejected the same way as 5 / 2
        quotient = abs(left.value) // abs(right.value)
        if quotient * abs(right.value) != abs(left.value):
            raise NotInRingError()

        if (left.value < 0) != (right.value < 0):
            quotient = -quotient
        return _checked(quotient)

    def __repr__(self) -> str:
        return "IntRing()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IntRing)

    def __hash__(self) -> int:
        return hash(IntRing)
