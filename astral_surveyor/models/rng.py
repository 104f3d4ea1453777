"""Deterministic random streams for universe generation.

Every procedural draw in Astral Surveyor comes from a ``SeededRandom``
built from a sub-seed. Sub-seeds are folded from the universe seed, a
salt naming the stream, and integer coordinates, so a chunk never
depends on which chunks were generated before it.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

MODULUS = 2_147_483_647  # 2**31 - 1
MULTIPLIER = 16_807

_MASK64 = 0xFFFFFFFFFFFFFFFF
_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3


class SeededRandom(random.Random):
    """Park-Miller minimal standard generator on top of ``random.Random``.

    Only ``random()`` is replaced, so ``uniform`` and ``shuffle`` keep
    working and all of them advance the same reproducible stream.
    """

    def __init__(self, seed: int | str | None = None) -> None:
        self._state = 1
        super().__init__(seed)

    def seed(self, a: int | str | None = None, version: int = 2) -> None:
        if a is None:
            a = random.randrange(1, MODULUS)
        elif isinstance(a, str):
            a = string_seed(a)
        state = int(a) % MODULUS
        if state <= 0:
            state += MODULUS - 1
        self._state = state

    def getstate(self) -> tuple[int]:
        return (self._state,)

    def setstate(self, state: tuple[int]) -> None:
        self._state = state[0]

    def random(self) -> float:
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    # ------------------------------------------------------------------
    # Generation API
    # ------------------------------------------------------------------

    def next(self) -> float:
        """Next float in [0, 1)."""
        return self.random()

    def next_float(self, low: float, high: float) -> float:
        return low + self.random() * (high - low)

    def next_int(self, low: int, high_exclusive: int) -> int:
        """Integer in [low, high_exclusive) from exactly one draw."""
        if high_exclusive <= low:
            raise ValueError(f"empty range [{low}, {high_exclusive})")
        span = high_exclusive - low
        return low + min(int(self.random() * span), span - 1)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.next_int(0, len(seq))]

    def chance(self, probability: float) -> bool:
        """One draw; True with the given probability."""
        return self.random() < probability


# ---------------------------------------------------------------------------
# Seed hashing
# ---------------------------------------------------------------------------

def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    return z ^ (z >> 31)


def _fnv1a(text: str) -> int:
    acc = _FNV_OFFSET
    for b in text.encode("utf-8"):
        acc ^= b
        acc = (acc * _FNV_PRIME) & _MASK64
    return acc


def hash64(*parts: int | str) -> int:
    """Fold integers and strings into one 64-bit hash."""
    h = 0x84222325CBF29CE4
    for part in parts:
        value = _fnv1a(part) if isinstance(part, str) else int(part)
        h ^= value & _MASK64
        h = _splitmix64(h)
    return h


def derive_seed(*parts: int | str) -> int:
    """Sub-seed in the generator's valid range [1, MODULUS - 1]."""
    return hash64(*parts) % (MODULUS - 1) + 1


def string_seed(text: str) -> int:
    """Stable 31-bit seed for a word or phrase (h * 31 + char)."""
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 2**31:
        h -= 2**32
    return abs(h)


def weighted_pick(rng: SeededRandom, table: Sequence[tuple[T, float]]) -> T:
    """Walk the cumulative distribution with a single draw.

    Weights need not sum to one; the first bucket containing the draw
    wins. A draw past the last bucket (float rounding) falls back to the
    lowest-index entry with a positive weight, without drawing again.
    """
    if not table:
        raise ValueError("cannot pick from an empty table")
    total = sum(weight for _, weight in table)
    roll = rng.next() * total
    cumulative = 0.0
    for item, weight in table:
        cumulative += weight
        if roll < cumulative:
            return item
    for item, weight in table:
        if weight > 0:
            return item
    return table[0][0]
