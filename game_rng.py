from __future__ import annotations

"""Deterministic random number generator shared by level generation.

``GameRNG`` wraps a numpy ``Generator`` seeded from a single integer.  When no
seed is supplied one is drawn and kept in ``initial_seed`` so that any level
can be regenerated bit-for-bit later.
"""

import random
from typing import Optional

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_randrange(self, start: int, stop: Optional[int] = None) -> int:
        """Uniform integer in ``[start, stop)``; ``[0, start)`` with one argument."""
        if stop is None:
            stop = start
            start = 0
        if stop <= start:
            raise ValueError("empty range")
        return self.get_int(start, stop - 1)

    def coin_flip(self) -> bool:
        """Fair coin; True for heads."""
        return self.get_int(0, 1) == 1


__all__ = ["GameRNG"]
