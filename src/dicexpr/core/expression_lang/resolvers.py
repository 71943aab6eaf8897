"""
Variable resolvers: the lookup capability the evaluator consumes.

A resolver maps an identifier, exactly as written in the expression
(dots included), to an integer or None when it has no value.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class VariableResolver(Protocol):
    """Anything that can look up identifier values."""

    def resolve(self, name: str) -> int | None: ...


class MappingResolver:
    """Resolve identifiers from a mapping of name -> value."""

    def __init__(self, values: Mapping[str, int]) -> None:
        self.values = values

    def resolve(self, name: str) -> int | None:
        return self.values.get(name)

    def __repr__(self) -> str:
        return f"MappingResolver({dict(self.values)!r})"


class ChainedResolver:
    """
    Try several resolvers in order; the first one with a value wins.

    Useful for layered lookups, e.g. a game piece's current hit points in
    front of its character sheet in front of its base stats:

        ChainedResolver(piece_values, sheet_values, stat_values)
    """

    def __init__(self, *resolvers: VariableResolver) -> None:
        self.resolvers = resolvers

    def resolve(self, name: str) -> int | None:
        for resolver in self.resolvers:
            value = resolver.resolve(name)
            if value is not None:
                return value
        return None


def as_resolver(source: VariableResolver | Mapping[str, int]) -> VariableResolver:
    """Wrap plain mappings; pass resolvers through unchanged."""
    if isinstance(source, Mapping):
        return MappingResolver(source)
    return source
