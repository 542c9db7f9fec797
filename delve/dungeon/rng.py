"""
project: Delve
module: rng.py
License: MIT

Seeded pseudo-random source shared by every generation phase.

A sine hash over an incrementing counter, reproducible for a given seed on
the same float implementation.
Values are not guaranteed identical across platforms down to the last ULP.
"""
from __future__ import annotations

import math

# Counters must stay exactly representable as floats (and distinct after
# increments); seeds outside (-SEED_LIMIT, SEED_LIMIT) are reduced modulo it.
SEED_LIMIT = 2**48


def normalize_seed(seed: int) -> int:
    if -SEED_LIMIT < seed < SEED_LIMIT:
        return seed
    return seed % SEED_LIMIT


class SeededRandom:
    __slots__ = ("seed", "_counter")

    def __init__(self, seed: int):
        self.seed = seed
        # The first hash (of the seed itself) is burned at construction.
        self._counter = normalize_seed(seed) + 1

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        x = math.sin(self._counter) * 10000
        self._counter += 1
        value = x - math.floor(x)
        # tiny negative x rounds up to exactly 1.0
        return 0.0 if value >= 1.0 else value


__all__ = ["SEED_LIMIT", "normalize_seed", "SeededRandom"]
