"""Pair generation for co-change counting."""

from collections.abc import Sequence
from itertools import combinations
from typing import TypeVar

T = TypeVar("T")


def unique_pairs(items: Sequence[T]) -> list[tuple[T, T]]:
    """All (items[i], items[j]) with i < j.

    n items yield n * (n - 1) / 2 pairs; fewer than two items yield none.
    """
    return list(combinations(items, 2))
