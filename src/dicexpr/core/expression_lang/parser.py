"""
Ordered-choice parser for dicexpr expressions.

Grammar:
    expression  → term (" " operator " " term)*
    term        → roll / integer / identifier      (first match wins)
    roll        → DIGITS "d" DIGITS
    integer     → DIGITS
    identifier  → [A-Za-z0-9.]+
    operator    → "+" | "-" | "*" | "/"

Separators are exactly one space. Each term alternative starts from the
same offset and either returns its match or None, so a failed roll attempt
on "3" falls through to integer without rewinding anything. Once an
alternative matches, it is committed: "3d6x" is a roll followed by garbage,
not an identifier.
"""

from __future__ import annotations

import string
from collections.abc import Callable

from dicexpr.core.errors import ExpressionSyntaxError
from dicexpr.core.ir.expressions import (
    INT_MAX,
    Expression,
    Identifier,
    Literal,
    Operator,
    Roll,
    Term,
)

_DIGITS = frozenset(string.digits)
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + ".")

_OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}

_Match = tuple[Term, int]


class _Parser:
    """Parser over a single source string. Positions are character offsets."""

    def __init__(self, source: str) -> None:
        self.source = source

    def error(self, pos: int, expected: str) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(self.source, pos, expected)

    # -- Grammar rules --

    def parse_expression(self) -> Expression:
        """term (" " operator " " term)*, consuming the whole source."""
        term, pos = self.parse_term(0)
        terms: list[Term] = [term]
        operators: list[Operator] = []

        while pos < len(self.source):
            if self.source[pos] != " ":
                raise self.error(pos, "' ' or end of input")
            op, pos = self.parse_operator(pos + 1)
            pos = self.expect_space(pos)
            term, pos = self.parse_term(pos)
            operators.append(op)
            terms.append(term)

        return Expression(terms=tuple(terms), operators=tuple(operators))

    def parse_term(self, pos: int) -> _Match:
        """roll / integer / identifier"""
        alternatives: tuple[Callable[[int], _Match | None], ...] = (
            self.match_roll,
            self.match_integer,
            self.match_identifier,
        )
        for alternative in alternatives:
            matched = alternative(pos)
            if matched is not None:
                return matched
        raise self.error(pos, "term")

    def parse_operator(self, pos: int) -> tuple[Operator, int]:
        op = _OPERATORS.get(self.source[pos : pos + 1])
        if op is None:
            raise self.error(pos, "operator")
        return op, pos + 1

    def expect_space(self, pos: int) -> int:
        if not self.source.startswith(" ", pos):
            raise self.error(pos, "' '")
        return pos + 1

    # -- Term alternatives --

    def match_roll(self, pos: int) -> _Match | None:
        """DIGITS "d" DIGITS, with nothing in between."""
        count_end = self._scan(pos, _DIGITS)
        if count_end == pos or not self.source.startswith("d", count_end):
            return None
        faces_start = count_end + 1
        faces_end = self._scan(faces_start, _DIGITS)
        if faces_end == faces_start:
            return None
        count = self._to_int(pos, count_end)
        faces = self._to_int(faces_start, faces_end)
        return Roll(count=count, faces=faces), faces_end

    def match_integer(self, pos: int) -> _Match | None:
        end = self._scan(pos, _DIGITS)
        if end == pos:
            return None
        return Literal(value=self._to_int(pos, end)), end

    def match_identifier(self, pos: int) -> _Match | None:
        end = self._scan(pos, _IDENT_CHARS)
        if end == pos:
            return None
        return Identifier(name=self.source[pos:end]), end

    # -- Helpers --

    def _scan(self, pos: int, allowed: frozenset[str]) -> int:
        """Return the end of the run of ``allowed`` characters starting at pos."""
        end = pos
        while end < len(self.source) and self.source[end] in allowed:
            end += 1
        return end

    def _to_int(self, start: int, end: int) -> int:
        digits = self.source[start:end].lstrip("0") or "0"
        # Length check first: int() refuses very long digit strings.
        if len(digits) > len(str(INT_MAX)) or int(digits) > INT_MAX:
            raise self.error(start, "integer within 64-bit range")
        return int(digits)


def parse_expr(source: str) -> Expression:
    """Parse an expression string into an Expression.

    Args:
        source: Expression text (e.g., "2d6 + strength.mod")

    Returns:
        Parsed expression with ``len(operators) == len(terms) - 1``.

    Raises:
        ExpressionSyntaxError: If any part of the text does not match the
            grammar. Nothing is partially parsed.
    """
    return _Parser(source).parse_expression()
