"""
Random Source - injectable uniform draws for the simulator.

All simulator randomness goes through RandomSource.random(), so tests can
script exact draw sequences. Derived draws (ranges, weighted picks, integer
ranges) are computed from that single primitive.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(Protocol):
    """Protocol for uniform random draws in [0, 1)."""

    def random(self) -> float: ...


class NumpyRandomSource:
    """RandomSource backed by numpy's default PCG64 generator."""

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())


def uniform(source: RandomSource, low: float, high: float) -> float:
    """Draw uniformly from [low, high)."""
    return low + source.random() * (high - low)


def randint(source: RandomSource, low: int, high: int) -> int:
    """Draw an integer uniformly from [low, high] inclusive."""
    return min(high, low + int(source.random() * (high - low + 1)))


def weighted_choice(source: RandomSource, items: Sequence[T], weights: Sequence[float]) -> T:
    """Pick one item with probability proportional to its weight."""
    total = sum(weights)
    target = source.random() * total
    cumulative = 0.0
    for item, weight in zip(items, weights):
        cumulative += weight
        if target < cumulative:
            return item
    return items[-1]
