"""Utility helpers for dataset factories."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from ..core.matrix import Matrix


def to_rows(array: np.ndarray) -> List[Matrix]:
    """Split a ``(n, d)`` array into ``n`` single-row matrices."""

    data = np.asarray(array, dtype=np.float64)
    if data.ndim == 1:
        data = data.reshape(-1, 1)
    return [Matrix.from_array(row) for row in data]


def min_max_scale(
    data: np.ndarray, low: float = 0.0, high: float = 1.0
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Scale each column of ``data`` into ``[low, high]``.

    Constant columns map to ``low``.  Returns the scaled data and the per-column
    minimum and maximum of the input.
    """

    data = np.asarray(data, dtype=np.float64)
    col_min = data.min(axis=0, keepdims=True)
    col_max = data.max(axis=0, keepdims=True)
    span = np.where(col_max - col_min == 0, 1.0, col_max - col_min)
    scaled = (data - col_min) / span
    return low + scaled * (high - low), col_min, col_max
