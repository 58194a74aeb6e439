"""Moving-average smoothing for measurement series."""

from __future__ import annotations
from typing import List, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


def moving_average(values: Sequence[float], window_size: int) -> Sequence[float]:
    """Trailing moving average with a left-clamped window.

    Index `i` is the mean of `values[max(0, i - window_size + 1):i + 1]`, so
    the window shrinks near the start instead of padding.

    Args:
        values: Input samples
        window_size: Number of samples per window. Values <= 1 disable
            smoothing and return `values` unchanged.

    Returns:
        Smoothed values, same length as the input.
    """
    if window_size <= 1:
        return values

    data = np.asarray(values, dtype=np.float64)
    n = len(data)
    if n == 0:
        return []

    # Warm-up part: growing window until it is full
    head_len = min(window_size - 1, n)
    head = np.cumsum(data[:head_len]) / np.arange(1, head_len + 1)

    if n < window_size:
        return head.tolist()

    tail = sliding_window_view(data, window_size).mean(axis=1)
    result: List[float] = head.tolist()
    result.extend(tail.tolist())
    return result
