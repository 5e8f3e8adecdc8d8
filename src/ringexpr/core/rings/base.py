"""
Ring contract for expression evaluation.

A ring here is a set with add, sub, mul and div where every operation is
allowed to fail. Integers are the motivating case: division is only defined
when the result stays in the ring, and fixed-width arithmetic overflows.

Implementations are separate classes that satisfy ``Ring``; they are not
subclasses of a shared base. The evaluator receives a ring instance and calls
its operations, so the set of operations travels with the value.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, TypeVar, runtime_checkable

E = TypeVar("E", bound=Hashable)


class RingError(Exception):
    """An arithmetic operation produced no element of the ring."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RingOverflowError(RingError):
    """Result falls outside the representable range of the ring."""

    def __init__(self, message: str = "Overflow") -> None:
        super().__init__(message)


class RingDivisionByZeroError(RingOverflowError):
    """Divisor is the additive identity."""

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)


class NotInRingError(RingError):
    """Result exists mathematically but is not a member of the ring."""

    def __init__(self, message: str = "Result not in ring") -> None:
        super().__init__(message)


@runtime_checkable
class Ring(Protocol[E]):
    """Fallible arithmetic over elements of type ``E``.

    Elements must be immutable, hashable, comparable by value and have a
    readable ``str()``. Every operation either returns an element or raises a
    ``RingError`` subclass; nothing else escapes on ordinary input.
    """

    name: str

    def zero(self) -> E:
        """Additive identity."""
        ...

    def from_int(self, value: int) -> E:
        """Lift an integer literal into the ring."""
        ...

    def add(self, left: E, right: E) -> E: ...

    def sub(self, left: E, right: E) -> E: ...

    def mul(self, left: E, right: E) -> E: ...

    def div(self, left: E, right: E) -> E: ...
