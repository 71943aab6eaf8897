"""Core dicexpr functionality: IR, parser, evaluator, configuration."""

from . import ir
from .errors import (
    ArithmeticOverflowError,
    ConfigError,
    DicexprError,
    DivisionByZeroError,
    ExpressionEvalError,
    ExpressionSyntaxError,
    InvalidDiceError,
    UnknownIdentifierError,
)

__all__ = [
    "ir",
    "DicexprError",
    "ExpressionSyntaxError",
    "ExpressionEvalError",
    "UnknownIdentifierError",
    "InvalidDiceError",
    "DivisionByZeroError",
    "ArithmeticOverflowError",
    "ConfigError",
]
