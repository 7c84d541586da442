"""
Maximum and arg-maximum over a restricted set of indices.

Both functions scan the indices in order and only move to a later index when
its value is strictly larger, so the first maximal index wins ties.
"""

from typing import Sequence

import numpy as np


def arg_max_value(indices: Sequence[int], values: np.ndarray) -> int:
    """
    Return the index (from indices) of the largest entry of values.

    Args:
        indices: Non-empty ordered sequence of valid indices into values
        values: Value table

    Returns:
        First index in iteration order holding the maximum value
    """
    assert len(indices) > 0, "arg_max_value needs at least one index"

    arg = indices[0]
    best = values[arg]
    for i in indices[1:]:
        if values[i] > best:
            best = values[i]
            arg = i
    return int(arg)


def max_value(indices: Sequence[int], values: np.ndarray) -> float:
    """
    Return the largest entry of values among the given indices.

    Args:
        indices: Non-empty ordered sequence of valid indices into values
        values: Value table

    Returns:
        Maximum value
    """
    return float(values[arg_max_value(indices, values)])
