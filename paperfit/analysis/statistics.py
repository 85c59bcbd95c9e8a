"""Aggregate helpers used by every fitting routine."""
from __future__ import annotations

from typing import Callable, Iterable

import numpy as np

from paperfit.models.points import PointsInput, as_xy


def total(values: Iterable[float]) -> float:
    """Sum of ``values`` as ``np.float64``; division by a zero total yields inf or nan."""

    arr = values if isinstance(values, np.ndarray) else np.asarray(list(values), dtype=float)
    return np.float64(np.sum(arr, dtype=float))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean. ``values`` must not be empty."""

    arr = np.asarray(list(values), dtype=float)
    return float(np.sum(arr) / arr.size)


def coefficient_of_determination(
    points: PointsInput, predict: Callable[[np.ndarray], np.ndarray]
) -> float:
    """Return ``1 - SS_res / SS_tot`` for ``predict`` evaluated at the points.

    Fewer than two points score ``0.0``. A constant y series has
    ``SS_tot == 0`` and yields a non-finite value, which is returned as is.
    """

    x, y = as_xy(points)
    if x.size < 2:
        return 0.0
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        y_hat = np.asarray(predict(x), dtype=float)
        ss_res = np.sum((y - y_hat) ** 2)
        ss_tot = np.sum((y - np.mean(y)) ** 2)
        return float(1 - np.float64(ss_res) / np.float64(ss_tot))
