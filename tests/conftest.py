"""Shared pytest fixtures for dicexpr tests."""

import pytest

from dicexpr.core.expression_lang import (
    FixedRandomSource,
    MappingResolver,
    SequenceRandomSource,
)


@pytest.fixture
def stats() -> MappingResolver:
    """Return a resolver with a few character statistics."""
    return MappingResolver(
        {
            "strength": 14,
            "strength.mod": 2,
            "level": 5,
            "hp": 30,
        }
    )


@pytest.fixture
def empty_resolver() -> MappingResolver:
    """Return a resolver that knows no names."""
    return MappingResolver({})


@pytest.fixture
def max_rng() -> FixedRandomSource:
    """Return a random source stuck at 6."""
    return FixedRandomSource(6)


@pytest.fixture
def min_rng() -> FixedRandomSource:
    """Return a random source stuck at 1."""
    return FixedRandomSource(1)


@pytest.fixture
def no_rng() -> SequenceRandomSource:
    """Return a random source that fails on the first draw."""
    return SequenceRandomSource([])
