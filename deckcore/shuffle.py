"""Seeded, reproducible card-order permutation."""

from __future__ import annotations

import math
from typing import Callable, Sequence, TypeVar

from .state import Clock, wall_clock_ms

T = TypeVar("T")

MODULUS = 2147483647
MULTIPLIER = 16807
RESEED_RANGE = 2**53 - 1


def _reduce_seed(seed: float) -> float:
    """Remainder of ``seed`` by the modulus, keeping the sign of ``seed``."""

    if isinstance(seed, int):
        # Integer remainder stays exact for ints too large for a float.
        remainder = abs(seed) % MODULUS
        return float(-remainder if seed < 0 else remainder)
    if not math.isfinite(seed):
        return 0.0
    return math.fmod(seed, MODULUS)


class SeededRandom:
    """Park-Miller linear congruential generator.

    State is kept as a float so that non-integral seeds (produced when
    re-seeding between passes) follow IEEE-754 double arithmetic exactly.
    """

    __slots__ = ("_value",)

    def __init__(self, seed: float) -> None:
        value = _reduce_seed(seed)
        if value <= 0:
            value += MODULUS - 1
        self._value = float(value)

    def __call__(self) -> float:
        return self.random()

    def random(self) -> float:
        """Advance the generator and return a draw in ``[0, 1)``."""

        self._value = math.fmod(self._value * MULTIPLIER, MODULUS)
        return (self._value - 1) / (MODULUS - 1)

    def reseeded(self) -> "SeededRandom":
        """Return a fresh generator seeded from this generator's next draw."""

        return SeededRandom(self.random() * RESEED_RANGE)


def fisher_yates(items: Sequence[T], random: Callable[[], float]) -> list[T]:
    """Backward Fisher-Yates pass over a copy of ``items``."""

    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = math.floor(random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_array(
    cards: Sequence[T],
    seed: int | float | None = None,
    iterations: int = 3,
    *,
    clock: Clock = wall_clock_ms,
) -> list[T]:
    """Return a reproducible permutation of ``cards``.

    Each of the ``iterations`` passes is a full Fisher-Yates shuffle; between
    passes the generator is replaced by one seeded from its own next draw, so
    the iteration count changes the result for a fixed seed. A non-positive
    ``iterations`` returns the input order unchanged.
    """

    if seed is None:
        seed = clock()

    result = list(cards)
    rng = SeededRandom(seed)
    for _ in range(iterations):
        result = fisher_yates(result, rng.random)
        rng = rng.reseeded()
    return result
