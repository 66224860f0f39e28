"""
passkit.randomness

Random sources used by the generator. Production code uses the OS CSPRNG
through the secrets module; tests can inject SeededRandomSource.
"""

import random
import secrets
from typing import Protocol

from .errors import RandomSourceError


class RandomSource(Protocol):
    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed int in [0, n)."""
        ...


class SystemRandomSource:
    """CSPRNG-backed source. secrets.randbelow is safe to share across threads."""

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class SeededRandomSource:
    """
    Deterministic source for tests. NOT cryptographically secure; never use it
    to produce real secrets.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._rand = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._rand.randrange(n)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r})"


DEFAULT_SOURCE = SystemRandomSource()


def draw(rng: RandomSource, n: int) -> int:
    """
    Draw an index in [0, n) from rng. Failures of the source, and values
    outside the range, surface as RandomSourceError.
    """
    try:
        value = rng.randbelow(n)
    except Exception as e:
        raise RandomSourceError(f"random source failed: {e}") from e
    if not isinstance(value, int) or not 0 <= value < n:
        raise RandomSourceError(f"random source returned {value!r}, expected [0, {n})")
    return value
