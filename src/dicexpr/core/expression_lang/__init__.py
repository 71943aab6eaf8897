"""
dicexpr expression language.

Parser, evaluator, and the capabilities the evaluator consumes.

Usage:
    from dicexpr.core.expression_lang import SystemRandomSource, evaluate, parse_expr

    expr = parse_expr("2d6 + strength.mod")
    result = evaluate(expr, {"strength.mod": 3}, SystemRandomSource(seed=7))
"""

from dicexpr.core.expression_lang.evaluator import evaluate, evaluate_text
from dicexpr.core.expression_lang.fields import ExpressionText
from dicexpr.core.expression_lang.parser import parse_expr
from dicexpr.core.expression_lang.resolvers import (
    ChainedResolver,
    MappingResolver,
    VariableResolver,
)
from dicexpr.core.expression_lang.rng import (
    FixedRandomSource,
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
)

parse = parse_expr

__all__ = [
    "ChainedResolver",
    "ExpressionText",
    "FixedRandomSource",
    "MappingResolver",
    "RandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
    "VariableResolver",
    "evaluate",
    "evaluate_text",
    "parse",
    "parse_expr",
]
