"""
Expression tree types.

Nodes are frozen pydantic models. Each compound node owns its children
outright: the tree has no shared subtrees and no cycles.

Supports:
- Ring element literals: 42
- Arithmetic: +, -, *, /
- Grouping: (2 + 5)
- Unary minus: -5, (-5)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ringexpr.core.rings.integer import IntElement

# Larger than any operator precedence; literals and groups never rotate
ATOMIC_PRECEDENCE = 1_000

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def precedence(self) -> int:
        if self in (BinaryOp.MUL, BinaryOp.DIV):
            return 1
        return 0


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """A ring element."""

    element: Any = Field(description="Element of the ring the tree is built over")

    model_config = ConfigDict(frozen=True)

    is_operator: ClassVar[bool] = False
    precedence: ClassVar[int] = ATOMIC_PRECEDENCE

    def __str__(self) -> str:
        return str(self.element)


class Group(BaseModel):
    """A parenthesized expression.

    Evaluates exactly like ``inner``; kept so the tree records where the
    source had parentheses.
    """

    inner: Expr

    model_config = ConfigDict(frozen=True)

    is_operator: ClassVar[bool] = False
    precedence: ClassVar[int] = ATOMIC_PRECEDENCE

    def __str__(self) -> str:
        return f"({self.inner})"


class Negate(BaseModel):
    """Unary minus: the additive inverse of ``operand``."""

    operand: Expr

    model_config = ConfigDict(frozen=True)

    is_operator: ClassVar[bool] = False
    precedence: ClassVar[int] = ATOMIC_PRECEDENCE

    def __str__(self) -> str:
        return f"-{self.operand}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    is_operator: ClassVar[bool] = True

    @property
    def precedence(self) -> int:
        return self.op.precedence

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Leaf | Group | Negate | BinaryExpr

# Rebuild models for recursive forward references
Group.model_rebuild()
Negate.model_rebuild()
BinaryExpr.model_rebuild()


def int_leaf(value: int) -> Leaf:
    """Shorthand for a leaf of the 64-bit integer ring."""
    return Leaf(element=IntElement(value=value))
