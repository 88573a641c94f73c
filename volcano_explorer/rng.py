"""Seeded linear congruential generator for reproducible synthetic data."""

from __future__ import annotations

import time
from typing import Callable

import numpy as np

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32
_NORM = float(_MODULUS - 1)


def create_generator(seed: int) -> Callable[[], float]:
    """Return a function producing a reproducible stream of floats.

    Each call advances ``s = (a * s + c) mod 2**32`` and returns
    ``s / (2**32 - 1)``.  Two generators built from the same seed yield
    identical streams.

    Parameters
    ----------
    seed : int
        Any integer; reduced modulo ``2**32``.

    Returns
    -------
    Callable[[], float]
    """
    state = int(seed) % _MODULUS

    def rng() -> float:
        nonlocal state
        state = (state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return state / _NORM

    return rng


def draw(seed: int, n: int) -> np.ndarray:
    """Return the first *n* values of the stream for *seed* as an array."""
    rng = create_generator(seed)
    return np.array([rng() for _ in range(n)], dtype=float)


def default_seed() -> int:
    """Wall-clock seed in milliseconds, used when no seed is given."""
    return int(time.time() * 1000) % _MODULUS
