"""
Right-to-left rotation parser for ring expressions.

Grammar:
    expr  → term (("+" | "-" | "*" | "/") term)*
    term  → INT | "(" expr ")" | "-" term

"*" and "/" bind tighter than "+" and "-"; equal precedence associates to the
left. A "-" with nothing to its left (start of input, or right after "(") is
unary minus.

The parser reads tokens from last to first, carrying at most one
already-parsed expression to the right of the cursor (the "pending"
expression). An operator takes the pending expression as its right operand
and then parses everything to its left as its left operand. That left operand
comes back as a finished tree; if its root binds more loosely than the new
operator, the new operator is rotated into the root's right edge:

    1 + 2 * 3    left of "*" is (1 + 2), "+" binds looser than "*"
                 → (1 + (2 * 3))

One rotation per operator is enough with two precedence levels, and it keeps
left-associativity because equal precedence never rotates.

The recursive formulation (one call per token) is replaced with an explicit
stack of continuation frames, so input length and nesting depth are not
bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from ringexpr.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)
from ringexpr.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Group,
    Leaf,
    Negate,
)
from ringexpr.core.rings import IntRing, Ring, RingError

logger = logging.getLogger(__name__)


class ParseErrorKind(StrEnum):
    """Broad category of a parse failure."""

    UNSPECIFIED = auto()
    TOKEN_PARSE_ERROR = auto()
    NO_EXPRESSION = auto()


class ExpressionParseError(Exception):
    """Error during expression parsing."""

    def __init__(
        self,
        message: str,
        pos: int = 0,
        kind: ParseErrorKind = ParseErrorKind.UNSPECIFIED,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.kind = kind

    def __str__(self) -> str:
        return f"Error parsing expression at position {self.pos}: {self.message}"


ADJACENT_ELEMENTS = "Ring element cannot be followed by another ring element in expression"
MISSING_RHS = "Missing right hand side expression for operator"
MISSING_LHS = "Missing left hand side expression for operator"
MISSING_LPAREN = "Missing left parenthesis for right parenthesis"
MISSING_RPAREN = "Missing right parenthesis for left parenthesis"
NO_EXPRESSION = "No expression"

_OPERATORS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


@dataclass
class _OperatorFrame:
    """An operator waiting for its left operand."""

    op: BinaryOp
    right: Expr
    pos: int


@dataclass
class _GroupFrame:
    """A ")" waiting for the expression inside it."""

    pos: int
    outer_in_group: bool


class _Parser:
    """Single-pass right-to-left parser."""

    def __init__(self, tokens: list[Token], ring: Ring[Any]) -> None:
        self.tokens = tokens
        self.ring = ring
        # Number of tokens not yet consumed; the next token is tokens[pos - 1]
        self.pos = len(tokens)
        self.pending: Expr | None = None
        self.in_group = False
        self.frames: list[_OperatorFrame | _GroupFrame] = []

    @property
    def current(self) -> Token | None:
        if self.pos == 0:
            return None
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        self.pos -= 1
        return self.tokens[self.pos]

    def take_pending(self) -> Expr | None:
        expr, self.pending = self.pending, None
        return expr

    def parse(self) -> Expr | None:
        while True:
            result = self._scan()
            while self.frames:
                frame = self.frames.pop()
                if isinstance(frame, _GroupFrame):
                    self._close_group(frame, result)
                    break
                result = self._reduce(frame, result)
            else:
                return result

    def _scan(self) -> Expr | None:
        """Consume tokens leftwards until the current context ends.

        The context ends at the start of input, or at a "(" when inside a
        group. The "(" is left for ``_close_group`` to consume.
        """
        while True:
            tok = self.current
            if tok is None:
                return self.take_pending()

            if tok.kind == TokenKind.LPAREN:
                if self.in_group:
                    return self.take_pending()
                raise ExpressionParseError(MISSING_RPAREN, tok.pos)

            self.advance()

            if tok.kind == TokenKind.INT:
                if self.pending is not None:
                    raise ExpressionParseError(ADJACENT_ELEMENTS, tok.pos)
                self.pending = self._leaf(tok)

            elif tok.kind in _OPERATORS:
                right = self.take_pending()
                if right is None:
                    raise ExpressionParseError(MISSING_RHS, tok.pos)
                self.frames.append(_OperatorFrame(_OPERATORS[tok.kind], right, tok.pos))

            elif tok.kind == TokenKind.RPAREN:
                if self.pending is not None:
                    raise ExpressionParseError(ADJACENT_ELEMENTS, tok.pos)
                self.frames.append(_GroupFrame(tok.pos, self.in_group))
                self.in_group = True

            else:
                raise ExpressionParseError(f"Unhandled token: {tok}", tok.pos)

    def _leaf(self, tok: Token) -> Leaf:
        assert tok.value is not None
        try:
            element = self.ring.from_int(tok.value)
        except RingError as e:
            raise ExpressionParseError(e.message, tok.pos) from e
        return Leaf(element=element)

    def _reduce(self, frame: _OperatorFrame, left: Expr | None) -> Expr:
        """Attach ``left`` to the operator in ``frame``, rotating if needed."""
        if left is None:
            if frame.op == BinaryOp.SUB:
                return Negate(operand=frame.right)
            raise ExpressionParseError(MISSING_LHS, frame.pos)

        if left.is_operator and left.precedence < frame.op.precedence:
            assert isinstance(left, BinaryExpr)
            rotated = BinaryExpr(op=frame.op, left=left.right, right=frame.right)
            return left.model_copy(update={"right": rotated})

        return BinaryExpr(op=frame.op, left=left, right=frame.right)

    def _close_group(self, frame: _GroupFrame, inner: Expr | None) -> None:
        """Match a ")" with its "(" and make the group the pending expression."""
        if inner is None:
            raise ExpressionParseError(NO_EXPRESSION, frame.pos, ParseErrorKind.NO_EXPRESSION)

        tok = self.current
        if tok is None or tok.kind != TokenKind.LPAREN:
            raise ExpressionParseError(MISSING_LPAREN, frame.pos)

        self.advance()
        self.pending = Group(inner=inner)
        self.in_group = frame.outer_in_group


def parse_tokens(tokens: Iterable[Token], ring: Ring[Any] | None = None) -> Expr:
    """Parse already-tokenized input into an expression tree.

    Args:
        tokens: Tokens in source order.
        ring: Ring that integer literals are lifted into (default: ``IntRing``).

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionParseError: If the tokens do not form an expression.
    """
    parser = _Parser(list(tokens), ring if ring is not None else IntRing())
    expr = parser.parse()

    # Ensure all tokens consumed
    assert parser.pos == 0, f"{parser.pos} token(s) left after parse"

    if expr is None:
        raise ExpressionParseError(NO_EXPRESSION, 0, ParseErrorKind.NO_EXPRESSION)
    return expr


def parse_expr(source: str, ring: Ring[Any] | None = None) -> Expr:
    """Parse an expression string into an expression tree.

    Args:
        source: Expression string (e.g., "2 + 5 * (3 - 1)")
        ring: Ring that integer literals are lifted into (default: ``IntRing``).

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionParseError: If the expression is invalid. Tokenization
            failures are reported with kind ``TOKEN_PARSE_ERROR``.
    """
    try:
        tokens = list(tokenize(source))
    except ExpressionTokenError as e:
        raise ExpressionParseError(e.message, e.pos, ParseErrorKind.TOKEN_PARSE_ERROR) from e

    logger.debug("Tokenized %d token(s) from %r", len(tokens), source)
    expr = parse_tokens(tokens, ring)
    logger.debug("Parsed %r into %s tree", source, type(expr).__name__)
    return expr
