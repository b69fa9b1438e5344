"""
Seeded Random
=============

Reproducible pseudo-random source keyed by a string seed.

GUARANTEES:
- Same seed + same call sequence -> same outputs, on any machine
- Never touches the random module or any process-wide state
- Not suitable for secrets; reproducibility is the point

Draw k (k = 0, 1, 2, ...) hashes f"{seed}::{k}" with SHA-256 and reads the
first 8 digest bytes as a big-endian integer over 2**64. A quotient that
rounds up to 1.0 is pulled back to the largest double below it.
"""

from __future__ import annotations
from typing import List, Sequence, TypeVar
import hashlib
import math

from .errors import EmptyInputError


T = TypeVar("T")

ALPHANUMERIC = "0123456789abcdefghijklmnopqrstuvwxyz"

_DRAW_SPAN = 2 ** 64
_BELOW_ONE = math.nextafter(1.0, 0.0)


class SeededRandom:

    def __init__(self, seed: str):
        self._seed = seed
        self._counter = 0

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def counter(self) -> int:
        """Number of draws made so far."""
        return self._counter

    def next(self) -> float:
        """Next value in [0, 1)."""
        digest = hashlib.sha256(f"{self._seed}::{self._counter}".encode("utf-8")).digest()
        self._counter += 1
        value = int.from_bytes(digest[:8], "big") / _DRAW_SPAN
        return min(value, _BELOW_ONE)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value)."""
        result = math.floor(self.next() * (max_value - min_value)) + min_value
        if max_value > min_value:
            # float rounding can land exactly on the excluded bound
            result = min(result, max_value - 1)
        return result

    def shuffle(self, sequence: Sequence[T]) -> List[T]:
        """Fisher-Yates from the end; returns a new list."""
        result = list(sequence)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def choice(self, sequence: Sequence[T]) -> T:
        if len(sequence) == 0:
            raise EmptyInputError("Cannot choose from an empty sequence")
        return sequence[self.next_int(0, len(sequence))]

    def alphanumeric(self, length: int) -> str:
        return "".join(
            ALPHANUMERIC[self.next_int(0, len(ALPHANUMERIC))] for _ in range(length)
        )

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed!r}, counter={self._counter})"
