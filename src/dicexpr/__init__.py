"""
dicexpr - dice and stat expressions for rules engines.

Parses flat arithmetic over dice rolls, integers, and named values
("2d6 + strength.mod") and evaluates it against caller-supplied lookups
and randomness.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    ArithmeticOverflowError,
    DicexprError,
    DivisionByZeroError,
    ExpressionEvalError,
    ExpressionSyntaxError,
    InvalidDiceError,
    UnknownIdentifierError,
)
from .core.expression_lang import (
    ChainedResolver,
    ExpressionText,
    FixedRandomSource,
    MappingResolver,
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    VariableResolver,
    evaluate,
    evaluate_text,
    parse,
    parse_expr,
)
from .core.ir import Expression, Identifier, Literal, Operator, Roll

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Parsing and evaluation
    "parse",
    "parse_expr",
    "evaluate",
    "evaluate_text",
    "ExpressionText",
    # IR
    "Expression",
    "Roll",
    "Literal",
    "Identifier",
    "Operator",
    # Capabilities
    "VariableResolver",
    "MappingResolver",
    "ChainedResolver",
    "RandomSource",
    "SystemRandomSource",
    "FixedRandomSource",
    "SequenceRandomSource",
    # Errors
    "DicexprError",
    "ExpressionSyntaxError",
    "ExpressionEvalError",
    "UnknownIdentifierError",
    "InvalidDiceError",
    "DivisionByZeroError",
    "ArithmeticOverflowError",
]
