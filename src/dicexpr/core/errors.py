"""
Error types for dicexpr parsing, evaluation, and configuration.

Two families never overlap:

- ExpressionSyntaxError: the text does not match the grammar.
- ExpressionEvalError and its subclasses: a well-formed expression could
  not be turned into a number.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dicexpr.core.ir.expressions import Roll


class DicexprError(Exception):
    """Base exception for all dicexpr errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return self.message


class ExpressionSyntaxError(DicexprError):
    """
    Raised when expression text cannot be parsed.

    Attributes:
        source: The full text that was being parsed
        position: 0-based character offset of the failure
        expected: Short description of what the grammar wanted there
    """

    def __init__(self, source: str, position: int, expected: str) -> None:
        self.source = source
        self.position = position
        self.expected = expected
        super().__init__(f"expected {expected} at position {position}")

    def _format_message(self) -> str:
        return f"{self.message}\n{self.format_snippet()}"

    def format_snippet(self) -> str:
        """Format the source line with an error marker under the position."""
        prefix = "  | "
        marker = " " * (len(prefix) + self.position) + "^"
        return f"{prefix}{self.source}\n{marker}"


class ExpressionEvalError(DicexprError):
    """Base class for failures while evaluating a parsed expression."""


class UnknownIdentifierError(ExpressionEvalError):
    """The resolver had no value for an identifier."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown identifier: {name!r}")


class InvalidDiceError(ExpressionEvalError):
    """A roll asked for dice with fewer than one face."""

    def __init__(self, roll: Roll) -> None:
        self.roll = roll
        super().__init__(f"Invalid dice {roll}: dice need at least one face")


class DivisionByZeroError(ExpressionEvalError):
    """The right operand of a division resolved to zero."""

    def __init__(self, left: int) -> None:
        self.left = left
        super().__init__(f"Division by zero ({left} / 0)")


class ArithmeticOverflowError(ExpressionEvalError):
    """An intermediate value left the 64-bit signed integer range."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Arithmetic overflow in {operation}")


class ConfigError(DicexprError):
    """
    Raised when a dicexpr.toml file is malformed.

    Examples:
    - Variable values that are not integers
    - A non-integer seed
    - A repetition count below one
    """

    pass
