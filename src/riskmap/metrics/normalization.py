"""Min-max normalization of raw signal series."""

from collections.abc import Sequence

import numpy as np


def min_max_normalize(values: Sequence[float]) -> list[float]:
    """Scale values to [0, 1].

    Returns all zeros when every value is equal (no variance), and an empty
    list for empty input.
    """
    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=np.float64)
    lo = arr.min()
    span = arr.max() - lo
    if span == 0:
        return [0.0] * len(arr)
    return ((arr - lo) / span).tolist()
