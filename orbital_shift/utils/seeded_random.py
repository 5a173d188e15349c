"""
Seeded pseudo-random sequence for reproducible puzzle generation.

Mulberry32 on 32-bit unsigned words. The same seed yields the same
stream on every platform and interpreter version.
"""
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


class SeededRandom:
    """
    Deterministic random sequence.

    Attributes:
        seed: The seed as given (any int; only its low 32 bits matter)
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & _MASK32

    def next_float(self) -> float:
        """Return the next value in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        s = self._state
        t = ((s ^ (s >> 15)) * (s | 1)) & _MASK32
        t = ((t + (((t ^ (t >> 7)) * (t | 61)) & _MASK32)) & _MASK32) ^ t
        return (t ^ (t >> 14)) / _TWO_POW_32

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both ends inclusive."""
        if max_value < min_value:
            raise ValueError(f"Empty range [{min_value}, {max_value}]")
        return min_value + int(self.next_float() * (max_value - min_value + 1))

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of `items` (draws run from the last index down)."""
        result = list(items)
        self.shuffle_in_place(result)
        return result

    def shuffle_in_place(self, items: MutableSequence[T]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i)
            items[i], items[j] = items[j], items[i]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"


def date_to_seed(date_string: str) -> int:
    """
    Hash a calendar date string (YYYY-MM-DD) into a signed 32-bit seed.

    Rolling hash `h = h * 31 + ord(ch)` wrapped to 32 bits; the result
    matches the seeds of previously published daily puzzles.
    """
    h = 0
    for ch in date_string:
        h = (h * 31 + ord(ch)) & _MASK32
    if h >= 0x80000000:
        h -= 0x100000000
    return h
