"""
underbar Random Source.

The randomness collaborator behind ``shuffle``.
"""

from __future__ import annotations

import random as _random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# Global random generator
_rng = _random.Random()


def set_seed(seed: int) -> None:
    """Set random seed for reproducibility."""
    _rng.seed(seed)


def get_rng() -> _random.Random:
    """Return the shared generator."""
    return _rng


def random_shuffle(seq: Sequence[T], rng: _random.Random | None = None) -> list[T]:
    """Return a shuffled copy of seq (Fisher-Yates)."""
    result = list(seq)
    (rng or _rng).shuffle(result)
    return result
