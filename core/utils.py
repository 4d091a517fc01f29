from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(float(value), lo), hi)


def clamp_score(value: float) -> float:
    """Clamp a risk score into [0, 100]."""
    return clamp(value, 0.0, 100.0)


def weighted_blend(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted sum of values; weights are expected to sum to 1."""
    if len(values) != len(weights):
        raise ValueError(f"Got {len(values)} values but {len(weights)} weights.")
    return float(np.dot(np.asarray(values, dtype=float), np.asarray(weights, dtype=float)))


def population_std(values: Iterable[float]) -> float:
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr))


def ols_fit(x: np.ndarray, y: np.ndarray) -> tuple:
    """
    Ordinary least squares fit of y = slope * x + intercept.

    Returns (slope, intercept). Requires at least two distinct x values.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)
    sum_x, sum_y = x.sum(), y.sum()
    denom = n * (x * x).sum() - sum_x * sum_x
    if n < 2 or denom == 0:
        raise ValueError("OLS needs at least two distinct x values.")
    slope = (n * (x * y).sum() - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)
