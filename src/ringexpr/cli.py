"""
ringexpr CLI - Entry point.

Commands:

- ``ringexpr eval EXPRESSION``: parse and evaluate, print ``Result: <value>``
- ``ringexpr tokens EXPRESSION``: print the token sequence

Errors go to stderr as ``<message>: <source>`` followed, for errors that
carry a position, by a line with ``^`` under the offending character.
Expressions starting with ``-`` need a ``--`` separator:
``ringexpr eval -- "-5 * 2"``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from ringexpr import __version__
from ringexpr.config import ConfigError, Settings, load_settings
from ringexpr.core.expression_lang import (
    ExpressionEvalError,
    ExpressionParseError,
    ExpressionTokenError,
    evaluate,
    parse_expr,
    tokenize,
)
from ringexpr.core.rings import UnknownRingError, get_ring

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate infix arithmetic over a ring.",
    no_args_is_help=True,
)


def format_caret(message: str, source: str, pos: int) -> str:
    """Render an error line and a caret line pointing at ``source[pos]``.

    The caret sits in 1-based column ``len(message) + pos + 3``, which is
    under ``source[pos]`` once ``"<message>: "`` is printed before the source.
    """
    return f"{message}: {source}\n{'^':>{len(message) + pos + 3}}"


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ringexpr {__version__}")
        raise typer.Exit()


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _report_positioned(message: str, source: str, pos: int, settings: Settings) -> None:
    if settings.caret:
        typer.echo(format_caret(message, source, pos), err=True)
    else:
        typer.echo(f"{message}: {source}", err=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (default: ./ringexpr.toml if present)",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Load settings and configure logging for all commands."""
    try:
        settings = load_settings(config)
    except ConfigError as e:
        typer.echo(f"Error loading config: {e}", err=True)
        raise typer.Exit(code=1)

    _configure_logging(settings)
    ctx.obj = settings


@app.command(name="eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression, e.g. \"2 * (3 + 4)\""),
    ring_name: str | None = typer.Option(
        None, "--ring", "-r", help="Ring to evaluate in (overrides settings)"
    ),
) -> None:
    """Parse and evaluate an expression."""
    settings: Settings = ctx.obj

    try:
        ring = get_ring(ring_name or settings.ring)
    except UnknownRingError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    try:
        expr = parse_expr(expression, ring)
    except ExpressionParseError as e:
        _report_positioned(e.message, expression, e.pos, settings)
        raise typer.Exit(code=1)

    try:
        value = evaluate(expr, ring)
    except ExpressionEvalError as e:
        # Evaluation errors carry no position
        typer.echo(f"{e.message}: {expression}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Result: {value}")


@app.command(name="tokens")
def tokens_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Print the tokens of an expression."""
    settings: Settings = ctx.obj

    try:
        tokens = list(tokenize(expression))
    except ExpressionTokenError as e:
        _report_positioned(e.message, expression, e.pos, settings)
        raise typer.Exit(code=1)

    logger.debug("Tokenized %d token(s)", len(tokens))
    typer.echo("Tokens: " + " ".join(str(tok) for tok in tokens))


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main(sys.argv[1:])
