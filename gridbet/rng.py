# gridbet/rng.py
"""
Seeded pseudo-random source shared by every bet generator.

Mulberry32, 32-bit arithmetic emulated with masks so a given seed replays
bit-for-bit against the browser implementation of the same generator.
"""
from __future__ import annotations

from typing import Callable, Optional

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0

RandomSource = Callable[[], float]


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def create_random(seed: int) -> RandomSource:
    """
    Return a generator of floats in [0, 1) for `seed`.

    Each call to create_random starts a fresh sequence; there is no module
    state, so two sources built from the same seed always agree.
    """
    state = int(seed) & _MASK32

    def mulberry32() -> float:
        nonlocal state
        state = (state + _INCREMENT) & _MASK32
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    return mulberry32


def date_hash(date: str) -> int:
    """Sum of character codes of the round identifier."""
    return sum(ord(c) for c in date)


def round_seed(date: str, base_seed: Optional[int] = None) -> int:
    h = date_hash(date)
    return h if base_seed is None else int(base_seed) + h
