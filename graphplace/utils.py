"""Random numbers, timing and small statistics helpers."""

from __future__ import annotations

import math
import random
import time
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

T = TypeVar("T")


def get_ms() -> int:
    """Return the number of milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def generate_rand(n: int) -> int:
    """Return a random integer in [0, n)."""
    if n <= 0:
        raise ValueError(f"upper bound must be positive, got {n}")
    return random.randrange(n)


def generate_rand_double(mini: float, maxi: float) -> float:
    """Return a random float in [mini, maxi), or mini when both bounds are equal."""
    if mini == maxi:
        return mini
    return mini + random.random() * (maxi - mini)


def shuffle(values: MutableSequence[T]) -> None:
    """Shuffle a sequence in place."""
    random.shuffle(values)


def remove_unordered(values: MutableSequence[T], value: T) -> bool:
    """Remove one occurrence of value by swapping it with the last element.

    The order of the remaining elements is not kept. Return True if a value was removed.
    """
    try:
        index = values.index(value)
    except ValueError:
        return False
    values[index] = values[-1]
    values.pop()
    return True


def _require_values(values: Sequence[float]) -> None:
    if not values:
        raise ValueError("the sequence is empty")


def mean(values: Sequence[float]) -> float:
    """Return the arithmetic mean."""
    _require_values(values)
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Return the population variance."""
    average = mean(values)
    return sum((v - average) ** 2 for v in values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Return the population standard deviation."""
    return math.sqrt(variance(values))


def median(values: Sequence[float]) -> float:
    """Return the median; the mean of the two middle values for an even length."""
    _require_values(values)
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) * 0.5
    return ordered[middle]