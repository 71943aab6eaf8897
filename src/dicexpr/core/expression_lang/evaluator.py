"""
Expression evaluator for dicexpr.

Folds a parsed expression strictly left to right: the first term seeds the
accumulator, then every (operator, term) pair resolves its term and applies
the operator. There is no precedence, so "1 + 2 * 3" is 9.

Pure evaluation apart from the capabilities the caller passes in. The
evaluator keeps no state and holds on to neither the resolver nor the
random source after returning.
"""

from __future__ import annotations

from collections.abc import Mapping

from dicexpr.core.errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    ExpressionEvalError,
    InvalidDiceError,
    UnknownIdentifierError,
)
from dicexpr.core.expression_lang.parser import parse_expr
from dicexpr.core.expression_lang.resolvers import VariableResolver, as_resolver
from dicexpr.core.expression_lang.rng import RandomSource
from dicexpr.core.ir.expressions import (
    INT_MAX,
    INT_MIN,
    Expression,
    Identifier,
    Literal,
    Operator,
    Roll,
    Term,
)


def evaluate(
    expr: Expression,
    resolver: VariableResolver | Mapping[str, int],
    rng: RandomSource,
) -> int:
    """Evaluate an expression to an integer.

    Every term is resolved exactly once, in source order, so rolls always
    consume randomness in the same sequence ("0 * 2d6" still draws twice).
    This holds when evaluation fails too: the remaining terms are still
    resolved and the first error is raised afterwards.

    Args:
        expr: Parsed expression.
        resolver: Identifier lookup. A plain mapping is accepted as well.
        rng: Source of dice draws.

    Returns:
        The final accumulator value.

    Raises:
        UnknownIdentifierError: The resolver has no value for a name.
        InvalidDiceError: A roll has fewer than one face.
        DivisionByZeroError: A division's right operand is zero.
        ArithmeticOverflowError: A value leaves the 64-bit signed range.
    """
    lookup = as_resolver(resolver)
    error: ExpressionEvalError | None = None

    acc = 0
    try:
        acc = _resolve_term(expr.terms[0], lookup, rng)
    except ExpressionEvalError as e:
        error = e

    for op, term in expr.steps():
        try:
            value = _resolve_term(term, lookup, rng)
            if error is None:
                acc = _apply(op, acc, value)
        except ExpressionEvalError as e:
            # Later failures never replace the first one
            if error is None:
                error = e

    if error is not None:
        raise error
    return acc


def evaluate_text(
    source: str,
    resolver: VariableResolver | Mapping[str, int],
    rng: RandomSource,
) -> int:
    """Parse and evaluate in one call. Syntax errors propagate unchanged."""
    return evaluate(parse_expr(source), resolver, rng)


def _resolve_term(term: Term, resolver: VariableResolver, rng: RandomSource) -> int:
    """Dispatch term resolution to the appropriate handler."""
    if isinstance(term, Literal):
        return term.value

    if isinstance(term, Identifier):
        value = resolver.resolve(term.name)
        if value is None:
            raise UnknownIdentifierError(term.name)
        return _checked(value, f"identifier {term.name!r}")

    if isinstance(term, Roll):
        return _roll(term, rng)

    raise ExpressionEvalError(f"Unknown term type: {type(term).__name__}")


def _roll(roll: Roll, rng: RandomSource) -> int:
    """Sum ``count`` independent draws from 1..faces.

    All dice are drawn before the sum is range-checked. Draws are positive,
    so a running sum that overflowed could not come back into range.
    """
    if roll.faces < 1:
        raise InvalidDiceError(roll)
    total = sum(rng.next_in_range(1, roll.faces) for _ in range(roll.count))
    return _checked(total, f"roll {roll}")


def _apply(op: Operator, left: int, right: int) -> int:
    """Apply one binary operator with overflow checking."""
    if op == Operator.ADD:
        return _checked(left + right, f"{left} + {right}")
    if op == Operator.SUB:
        return _checked(left - right, f"{left} - {right}")
    if op == Operator.MUL:
        return _checked(left * right, f"{left} * {right}")
    if op == Operator.DIV:
        if right == 0:
            raise DivisionByZeroError(left)
        return _checked(_div_toward_zero(left, right), f"{left} / {right}")

    raise ExpressionEvalError(f"Unknown operator: {op}")


def _div_toward_zero(left: int, right: int) -> int:
    """Integer division truncating toward zero: -7 / 2 == -3, not -4."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _checked(value: int, operation: str) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise ArithmeticOverflowError(operation)
    return value
