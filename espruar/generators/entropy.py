#!/usr/bin/env python3
"""
Entropy Module for Name Generation
===================================
Random sources used by every generator.

Generators never reach for the ``random`` module directly; they hold a
RandomSource so a test can hand them a seeded one and get repeatable draws.

- TrueRandom: secrets.SystemRandom backed, the default
- SeededRandom: random.Random backed, reproducible from a seed
"""

import random
import secrets
from typing import Any, Optional, Sequence


class RandomSource:
    """Interface every generator draws from."""

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        raise NotImplementedError

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        raise NotImplementedError

    def choice(self, seq: Sequence) -> Any:
        """Return a uniformly chosen element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[int(self.random() * len(seq))]


class TrueRandom(RandomSource):
    """Cryptographically secure random source (os entropy pool)."""

    def __init__(self):
        self._rng = secrets.SystemRandom()

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


class SeededRandom(RandomSource):
    """Deterministic random source for tests and reproducible runs."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


# Global instance
_true_random = TrueRandom()


def get_rng(seed: Optional[int] = None) -> RandomSource:
    """
    Get a random source.

    With a seed, returns a fresh SeededRandom; otherwise the shared
    TrueRandom instance.
    """
    if seed is not None:
        return SeededRandom(seed)
    return _true_random
