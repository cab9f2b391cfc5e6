"""Seeded xorshift32 generator so a (level, seed) pair always yields the same puzzle."""

from __future__ import annotations

import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_SEED_SALT = 0xDEADBEEF
_TWO_POW_32 = 4294967296.0


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


class XorShift32:
    """Deterministic RNG exposing the subset of ``random.Random`` the engine uses.

    The state is kept as a signed 32-bit integer and the right shift is
    arithmetic, so the stream is identical on every platform.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._state = ((seed ^ _SEED_SALT) & _MASK32) or 1

    def random(self) -> float:
        """Return the next float in ``[0, 1)``."""
        s = _to_int32(self._state ^ (self._state << 13))
        s ^= s >> 17
        s = _to_int32(s ^ (s << 5))
        self._state = s
        return (s & _MASK32) / _TWO_POW_32

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in ``[a, b]`` inclusive."""
        return math.floor(self.random() * (b - a + 1)) + a

    def choice(self, seq: Sequence[T]) -> T:
        return seq[math.floor(self.random() * len(seq))]

    def shuffled(self, seq: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates permutation of ``seq``; the input is not touched."""
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = math.floor(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items
