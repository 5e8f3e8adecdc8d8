"""Tests for the ring contract and the 64-bit integer ring."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ringexpr.core.rings import (
    I64_MAX,
    I64_MIN,
    IntElement,
    IntRing,
    NotInRingError,
    Ring,
    RingDivisionByZeroError,
    RingError,
    RingOverflowError,
    UnknownRingError,
    available_rings,
    get_ring,
    register_ring,
)


def el(value: int) -> IntElement:
    return IntElement(value=value)


class TestIntElement:
    """Elements are immutable, hashable 64-bit values."""

    def test_display(self) -> None:
        assert str(el(-42)) == "-42"

    def test_equality_and_hash(self) -> None:
        assert el(5) == el(5)
        assert el(5) != el(6)
        assert len({el(5), el(5), el(6)}) == 2

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            el(5).value = 6  # type: ignore[misc]

    def test_range_is_validated(self) -> None:
        assert el(I64_MAX).value == 2**63 - 1
        assert el(I64_MIN).value == -(2**63)
        with pytest.raises(ValidationError):
            el(I64_MAX + 1)
        with pytest.raises(ValidationError):
            el(I64_MIN - 1)


class TestIntRingArithmetic:
    """add, sub and mul are exact inside the range and fail outside it."""

    def test_add(self, ring: IntRing) -> None:
        assert ring.add(el(5), el(-3)) == el(2)

    def test_add_overflow(self, ring: IntRing) -> None:
        with pytest.raises(RingOverflowError, match="Overflow"):
            ring.add(el(I64_MAX), el(1))

    def test_sub(self, ring: IntRing) -> None:
        assert ring.sub(el(5), el(2)) == el(3)

    def test_sub_overflow(self, ring: IntRing) -> None:
        with pytest.raises(RingOverflowError):
            ring.sub(el(I64_MIN), el(1))

    def test_mul(self, ring: IntRing) -> None:
        assert ring.mul(el(5), el(2)) == el(10)
        assert ring.mul(el(5), el(-2)) == el(-10)

    def test_mul_overflow(self, ring: IntRing) -> None:
        with pytest.raises(RingOverflowError):
            ring.mul(el(I64_MAX), el(2))

    def test_extremes_in_range(self, ring: IntRing) -> None:
        assert ring.add(el(I64_MAX - 1), el(1)) == el(I64_MAX)
        assert ring.sub(el(I64_MIN + 1), el(1)) == el(I64_MIN)
        assert ring.mul(el(I64_MIN), el(1)) == el(I64_MIN)

    def test_overflow_message(self, ring: IntRing) -> None:
        with pytest.raises(RingError) as exc_info:
            ring.add(el(I64_MAX), el(I64_MAX))
        assert exc_info.value.message == "Overflow"


class TestIntRingDivision:
    """Division is exact or fails with a named reason."""

    @pytest.mark.parametrize(
        ("dividend", "divisor", "quotient"),
        [(6, 2, 3), (-6, 2, -3), (6, -2, -3), (-6, -2, 3), (0, 5, 0)],
    )
    def test_exact(self, ring: IntRing, dividend: int, divisor: int, quotient: int) -> None:
        assert ring.div(el(dividend), el(divisor)) == el(quotient)

    @pytest.mark.parametrize(("dividend", "divisor"), [(5, 2), (-5, 2), (5, -2)])
    def test_not_in_ring(self, ring: IntRing, dividend: int, divisor: int) -> None:
        with pytest.raises(NotInRingError, match="Result not in ring"):
            ring.div(el(dividend), el(divisor))

    @pytest.mark.parametrize("dividend", [2, 0])
    def test_division_by_zero(self, ring: IntRing, dividend: int) -> None:
        with pytest.raises(RingDivisionByZeroError, match="Division by zero"):
            ring.div(el(dividend), el(0))

    def test_division_by_zero_is_overflow_class(self, ring: IntRing) -> None:
        with pytest.raises(RingOverflowError):
            ring.div(el(2), el(0))

    def test_min_by_minus_one_overflows(self, ring: IntRing) -> None:
        with pytest.raises(RingOverflowError) as exc_info:
            ring.div(el(I64_MIN), el(-1))
        assert not isinstance(exc_info.value, RingDivisionByZeroError)

    def test_not_in_ring_is_not_overflow(self, ring: IntRing) -> None:
        with pytest.raises(NotInRingError) as exc_info:
            ring.div(el(5), el(2))
        assert not isinstance(exc_info.value, RingOverflowError)


class TestRingContract:
    """IntRing satisfies the Ring protocol and the registry."""

    def test_int_ring_is_a_ring(self, ring: IntRing) -> None:
        assert isinstance(ring, Ring)

    def test_zero_and_from_int(self, ring: IntRing) -> None:
        assert ring.zero() == el(0)
        assert ring.from_int(17) == el(17)

    def test_get_ring(self) -> None:
        assert isinstance(get_ring("int"), IntRing)
        assert "int" in available_rings()

    def test_unknown_ring(self) -> None:
        with pytest.raises(UnknownRingError, match="Unknown ring"):
            get_ring("rational")

    def test_register_ring(self) -> None:
        register_ring("int-alias", IntRing)
        try:
            assert isinstance(get_ring("int-alias"), IntRing)
        finally:
            from ringexpr.core.rings import _RINGS

            _RINGS.pop("int-alias")
