"""
Ring expression language.

Tokenizer, parser and evaluator for infix arithmetic over a ring.

Usage:
    from ringexpr.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("2 + 5 * (3 - 1)")
    result = evaluate(expr)
    # result == IntElement(value=12)
"""

from ringexpr.core.expression_lang.evaluator import ExpressionEvalError, evaluate
from ringexpr.core.expression_lang.parser import (
    ExpressionParseError,
    ParseErrorKind,
    parse_expr,
    parse_tokens,
)
from ringexpr.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)

__all__ = [
    "ExpressionEvalError",
    "ExpressionParseError",
    "ExpressionTokenError",
    "ParseErrorKind",
    "Token",
    "TokenKind",
    "evaluate",
    "parse_expr",
    "parse_tokens",
    "tokenize",
]
