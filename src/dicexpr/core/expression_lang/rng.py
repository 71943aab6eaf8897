"""
Random sources: the randomness capability the evaluator consumes.

Every source owns its own state. Nothing here touches the module-level
``random`` generator, so two evaluations never share randomness unless the
caller hands them the same source.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Produces uniformly distributed integers in an inclusive range."""

    def next_in_range(self, minimum: int, maximum: int) -> int: ...


class SystemRandomSource:
    """Backed by a private ``random.Random``; pass a seed for repeatable rolls."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def next_in_range(self, minimum: int, maximum: int) -> int:
        return self._random.randint(minimum, maximum)

    def __repr__(self) -> str:
        return f"SystemRandomSource(seed={self.seed!r})"


class FixedRandomSource:
    """Always returns the same value, whatever the range."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def next_in_range(self, minimum: int, maximum: int) -> int:
        self.calls.append((minimum, maximum))
        return self.value


class SequenceRandomSource:
    """Replays a fixed sequence of values, one per draw."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._index = 0
        self.calls: list[tuple[int, int]] = []

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index

    def next_in_range(self, minimum: int, maximum: int) -> int:
        if self._index >= len(self._values):
            raise RuntimeError(f"Random sequence exhausted after {len(self._values)} draws")
        value = self._values[self._index]
        self._index += 1
        self.calls.append((minimum, maximum))
        return value
