"""Intermediate representation: the parsed expression tree."""

from ringexpr.core.ir.expressions import (
    ATOMIC_PRECEDENCE,
    BinaryExpr,
    BinaryOp,
    Expr,
    Group,
    Leaf,
    Negate,
    int_leaf,
)

__all__ = [
    "ATOMIC_PRECEDENCE",
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Group",
    "Leaf",
    "Negate",
    "int_leaf",
]
