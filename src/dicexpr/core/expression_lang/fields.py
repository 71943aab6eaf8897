"""
Pydantic field type for expression-valued content.

Content models (spells, items, effects) store formulas as text. Declaring
the field as ``ExpressionText`` parses the text on validation and writes the
canonical text back on serialization, so the formula can also be shown to
players as written:

    class Spell(BaseModel):
        name: str
        magnitude: ExpressionText | None = None

    Spell.model_validate({"name": "Spark", "magnitude": "1d6 + magic"})
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from dicexpr.core.errors import ExpressionSyntaxError
from dicexpr.core.expression_lang.parser import parse_expr
from dicexpr.core.ir.expressions import Expression


def _coerce_expression(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return parse_expr(value)
        except ExpressionSyntaxError as e:
            # pydantic turns ValueError into a field-level ValidationError
            raise ValueError(e.message) from e
    return value


ExpressionText = Annotated[
    Expression,
    BeforeValidator(_coerce_expression),
    PlainSerializer(str, return_type=str),
]
