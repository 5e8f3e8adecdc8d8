"""
Expression evaluator for ring expressions.

Reduces an expression tree to a single ring element. Pure evaluation: no I/O,
no side effects, the tree is never modified. The walk uses an explicit stack,
so deeply nested trees do not hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Any

from ringexpr.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Group, Leaf, Negate
from ringexpr.core.rings import IntRing, Ring, RingError

logger = logging.getLogger(__name__)


class ExpressionEvalError(Exception):
    """Error during expression evaluation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Error evaluating expression: {self.message}"


_RING_METHODS: dict[BinaryOp, str] = {
    BinaryOp.ADD: "add",
    BinaryOp.SUB: "sub",
    BinaryOp.MUL: "mul",
    BinaryOp.DIV: "div",
}


def evaluate(expr: Expr, ring: Ring[Any] | None = None) -> Any:
    """Evaluate an expression tree in a ring.

    Left operands are evaluated before right operands and the first failing
    ring operation stops evaluation.

    Args:
        expr: Parsed expression tree.
        ring: Ring supplying the arithmetic (default: ``IntRing``).

    Returns:
        The computed ring element.

    Raises:
        ExpressionEvalError: If a ring operation fails. The ``RingError`` is
            chained as ``__cause__``.
    """
    ring = ring if ring is not None else IntRing()
    try:
        value = _interpret(expr, ring)
    except RingError as e:
        logger.debug("Evaluation failed: %s", e.message)
        raise ExpressionEvalError(e.message) from e

    logger.debug("Evaluated to %s", value)
    return value


def _interpret(expr: Expr, ring: Ring[Any]) -> Any:
    """Post-order walk; each node is visited once on the way down, once on the way up."""
    values: list[Any] = []
    work: list[tuple[Expr, bool]] = [(expr, False)]

    while work:
        node, children_done = work.pop()

        if isinstance(node, Leaf):
            values.append(node.element)

        elif isinstance(node, Group):
            work.append((node.inner, False))

        elif isinstance(node, Negate):
            if children_done:
                values.append(ring.sub(ring.zero(), values.pop()))
            else:
                work.append((node, True))
                work.append((node.operand, False))

        elif isinstance(node, BinaryExpr):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(_apply(ring, node.op, left, right))
            else:
                work.append((node, True))
                # Pushed last so it is popped (and evaluated) first
                work.append((node.right, False))
                work.append((node.left, False))

        else:
            raise ExpressionEvalError(f"Unknown expression type: {type(node).__name__}")

    assert len(values) == 1
    return values[0]


def _apply(ring: Ring[Any], op: BinaryOp, left: Any, right: Any) -> Any:
    operation = getattr(ring, _RING_METHODS[op])
    return operation(left, right)
