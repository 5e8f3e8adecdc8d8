"""
Tokenizer for ring expressions.

Converts an expression string into a lazy sequence of positioned tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from ringexpr.core.rings import I64_MAX


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    INT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Keywords (recognised, not part of the grammar)
    MOD = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token and the offset of its first character."""

    kind: TokenKind
    pos: int
    value: int | None = None

    def __str__(self) -> str:
        if self.kind == TokenKind.INT:
            return str(self.value)
        return _DISPLAY[self.kind]


_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
}

_DISPLAY: dict[TokenKind, str] = {kind: c for c, kind in _SINGLE_CHAR.items()}
_DISPLAY[TokenKind.MOD] = "mod"

# ASCII only: str.isdigit() would accept superscripts and other scripts
_DIGITS_RE = re.compile(r"[0-9]+")
_MAX_DIGITS = len(str(I64_MAX))


class ExpressionTokenError(Exception):
    """Error during expression tokenization."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos

    def __str__(self) -> str:
        return f"Unparseable input at position {self.pos}: {self.message}"


def tokenize(source: str) -> Iterator[Token]:
    """Lazily tokenize an expression string.

    Each call returns a fresh generator. Whitespace is skipped. The first
    invalid input raises ``ExpressionTokenError`` and ends the sequence.
    """
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        kind = _SINGLE_CHAR.get(c)
        if kind is not None:
            yield Token(kind, i)
            i += 1
            continue

        if c == "m":
            if source[i : i + 3] != "mod":
                raise ExpressionTokenError("Invalid token", i)
            yield Token(TokenKind.MOD, i)
            i += 3
            continue

        m = _DIGITS_RE.match(source, i)
        if m is not None:
            digits = m.group(0).lstrip("0") or "0"
            # Length check first: int() refuses very long digit strings
            if len(digits) > _MAX_DIGITS or int(digits) > I64_MAX:
                raise ExpressionTokenError("Decimal number too big", i)
            value = int(digits)
            yield Token(TokenKind.INT, i, value)
            i = m.end()
            continue

        raise ExpressionTokenError("Invalid token", i)
