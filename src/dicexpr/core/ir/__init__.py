"""
dicexpr intermediate representation.

Immutable pydantic models produced by the parser and consumed by the
evaluator.
"""

from .expressions import INT_MAX, INT_MIN, Expression, Identifier, Literal, Operator, Roll, Term

__all__ = [
    "INT_MAX",
    "INT_MIN",
    "Expression",
    "Identifier",
    "Literal",
    "Operator",
    "Roll",
    "Term",
]
