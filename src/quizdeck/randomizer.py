"""
Shuffle primitives shared by question presentation and session sampling.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Return a uniformly random permutation of ``items`` as a new list.

    Fisher-Yates from the last position down; the swap partner for position
    ``i`` is drawn from ``[0, i]`` inclusive. The input is never mutated.
    """
    rng = rng or random
    copy = list(items)
    for i in range(len(copy) - 1, 0, -1):
        j = rng.randint(0, i)
        copy[i], copy[j] = copy[j], copy[i]
    return copy


def sample(items: Sequence[T], k: int, rng: random.Random | None = None) -> list[T]:
    """Draw up to ``k`` items without replacement, in random order."""
    return shuffle(items, rng)[: max(0, k)]
