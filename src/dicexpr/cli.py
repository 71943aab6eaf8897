"""
dicexpr command-line interface.

Commands:
- parse: show how an expression is read
- roll:  evaluate an expression with dice and variables
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dicexpr._version import get_version
from dicexpr.core.config import resolve_config
from dicexpr.core.errors import ConfigError, ExpressionEvalError, ExpressionSyntaxError
from dicexpr.core.expression_lang import MappingResolver, SystemRandomSource, evaluate, parse_expr
from dicexpr.core.ir.expressions import Expression, Identifier, Literal, Roll

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    help="dicexpr - parse and roll dice/stat expressions such as '2d6 + strength.mod'",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"dicexpr {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging on stderr"),
) -> None:
    """dicexpr CLI main callback for global options."""
    # Log to stderr so command output on stdout stays clean
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )


@app.command(name="parse")
def parse_command(
    expression: str = typer.Argument(..., help="Expression text, e.g. '3d6 + 2'"),
    json_output: bool = typer.Option(False, "--json", help="Print the parsed model as JSON"),
) -> None:
    """Parse an expression and show its terms and operators."""
    expr = _parse_or_exit(expression)

    if json_output:
        typer.echo(expr.model_dump_json(indent=2))
        return

    table = Table(title=escape(str(expr)))
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Text")

    table.add_row("0", _term_kind(expr.terms[0]), escape(str(expr.terms[0])))
    for index, (op, term) in enumerate(expr.steps(), start=1):
        table.add_row("", "operator", escape(op.value))
        table.add_row(str(index), _term_kind(term), escape(str(term)))

    console.print(table)
    _print_summary(expr)


@app.command(name="roll")
def roll_command(
    expression: str = typer.Argument(..., help="Expression text, e.g. '2d6 + strength.mod'"),
    var: list[str] = typer.Option(
        [], "--var", "-V", help="Variable value as NAME=VALUE (repeatable)"
    ),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Seed for repeatable rolls"),
    times: int | None = typer.Option(
        None, "--times", "-n", min=1, help="Number of evaluations (default: config or 1)"
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Path to dicexpr.toml (default: ./dicexpr.toml if present)",
    ),
) -> None:
    """Evaluate an expression, printing one result per line."""
    expr = _parse_or_exit(expression)
    overrides = _parse_vars(var)

    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(e.message)}")
        raise typer.Exit(code=1)

    effective_seed = seed if seed is not None else config.seed
    resolver = MappingResolver({**config.variables, **overrides})
    rng = SystemRandomSource(effective_seed)
    logger.debug("Rolling %r with seed=%s", str(expr), effective_seed)

    for _ in range(times or config.times):
        try:
            value = evaluate(expr, resolver, rng)
        except ExpressionEvalError as e:
            console.print(f"[red]Evaluation failed:[/red] {escape(e.message)}")
            raise typer.Exit(code=1)
        typer.echo(str(value))


def _parse_or_exit(expression: str) -> Expression:
    try:
        return parse_expr(expression)
    except ExpressionSyntaxError as e:
        console.print(f"[red]Syntax error:[/red] {escape(e.message)}")
        console.print(e.format_snippet(), markup=False, highlight=False)
        raise typer.Exit(code=1)


def _parse_vars(values: list[str]) -> dict[str, int]:
    """Turn NAME=VALUE options into a mapping."""
    parsed: dict[str, int] = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--var")
        try:
            parsed[name] = int(raw)
        except ValueError:
            raise typer.BadParameter(
                f"value for {name!r} must be an integer, got {raw!r}", param_hint="--var"
            ) from None
    return parsed


def _term_kind(term: Roll | Literal | Identifier) -> str:
    if isinstance(term, Roll):
        return "roll"
    if isinstance(term, Literal):
        return "integer"
    return "identifier"


def _print_summary(expr: Expression) -> None:
    if expr.identifiers:
        console.print(f"Identifiers: {escape(', '.join(expr.identifiers))}")
    console.print("Deterministic: " + ("yes" if expr.is_deterministic else "no"))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main()
