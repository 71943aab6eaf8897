"""
Expression types for dicexpr IR.

An expression is a flat, non-empty run of terms joined by operators:

    2d6 + strength.mod * 2

Supports:
- Dice rolls: 3d6, 1d20, 0d4
- Integer literals: 0, 7, 120
- Identifiers: strength, strength.mod, stats.heart
- Operators: +, -, *, / (all one precedence level, applied left to right)
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Values are 64-bit signed integers; anything outside is an overflow.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Binary operators. There is no precedence between them."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# Term node types
# ---------------------------------------------------------------------------


class Roll(BaseModel):
    """
    Dice notation NdM: the sum of ``count`` draws from 1..``faces``.

    ``faces`` is not bounded here; a roll with fewer than one face is
    well-formed and rejected when evaluated.
    """

    count: int = Field(ge=0, description="Number of dice")
    faces: int = Field(description="Faces per die")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return f"{self.count}d{self.faces}"


class Literal(BaseModel):
    """A non-negative integer literal."""

    value: int = Field(ge=0, description="The literal value")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return str(self.value)


class Identifier(BaseModel):
    """
    A named value looked up at evaluation time.

    Examples:
        - Identifier(name="level")
        - Identifier(name="strength.mod")
    """

    name: str = Field(pattern=r"^[A-Za-z0-9.]+$", description="Name as written")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return self.name


Term = Roll | Literal | Identifier


# ---------------------------------------------------------------------------
# Expression
# ---------------------------------------------------------------------------


class Expression(BaseModel):
    """
    Terms interleaved with operators.

    Invariant: ``len(operators) == len(terms) - 1``, so the sequence always
    starts and ends with a term and never has two operators or two terms
    side by side.
    """

    terms: tuple[Term, ...] = Field(min_length=1, description="Terms in source order")
    operators: tuple[Operator, ...] = Field(
        default=(), description="Operators between consecutive terms"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_shape(self) -> Expression:
        if len(self.operators) != len(self.terms) - 1:
            raise ValueError(
                f"expression with {len(self.terms)} terms needs "
                f"{len(self.terms) - 1} operators, got {len(self.operators)}"
            )
        return self

    def __str__(self) -> str:
        parts = [str(self.terms[0])]
        for op, term in self.steps():
            parts.append(f"{op.value} {term}")
        return " ".join(parts)

    def steps(self) -> Iterator[tuple[Operator, Term]]:
        """Yield (operator, term) pairs following the first term."""
        return zip(self.operators, self.terms[1:], strict=True)

    @property
    def identifiers(self) -> list[str]:
        """Identifier names in order of first appearance."""
        names = (t.name for t in self.terms if isinstance(t, Identifier))
        return list(dict.fromkeys(names))

    @property
    def rolls(self) -> list[Roll]:
        return [t for t in self.terms if isinstance(t, Roll)]

    @property
    def is_deterministic(self) -> bool:
        """True when evaluating never consumes randomness."""
        return not self.rolls
