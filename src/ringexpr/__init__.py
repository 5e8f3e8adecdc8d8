"""
ringexpr - position-aware infix arithmetic over pluggable rings.

Parses expressions such as ``2 * (3 + 4) / 7`` into a tree and evaluates
them with fallible ring arithmetic: overflow and inexact division are
reported as errors, never as wrong answers.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.expression_lang import (
    ExpressionEvalError,
    ExpressionParseError,
    ExpressionTokenError,
    ParseErrorKind,
    evaluate,
    parse_expr,
    tokenize,
)
from .core.rings import IntElement, IntRing, Ring, RingError, get_ring


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("ringexpr")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ExpressionEvalError",
    "ExpressionParseError",
    "ExpressionTokenError",
    "IntElement",
    "IntRing",
    "ParseErrorKind",
    "Ring",
    "RingError",
    "evaluate",
    "get_ring",
    "parse_expr",
    "tokenize",
]
