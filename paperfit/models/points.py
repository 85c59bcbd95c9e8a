"""Data point records and conversion helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Point:
    """A single measured ``(x, y)`` pair."""

    x: float
    y: float


PointLike = Union[Point, Sequence[float]]
PointsInput = Union[Iterable[PointLike], pd.DataFrame]


def as_xy(points: PointsInput) -> Tuple[np.ndarray, np.ndarray]:
    """Split ``points`` into float arrays of x and y values.

    Accepts :class:`Point` instances, ``(x, y)`` pairs or a DataFrame with
    ``x`` and ``y`` columns. Input order is preserved.
    """

    if isinstance(points, pd.DataFrame):
        if "x" not in points.columns or "y" not in points.columns:
            raise ValueError("DataFrame must contain 'x' and 'y' columns")
        return (
            points["x"].to_numpy(dtype=float, copy=True),
            points["y"].to_numpy(dtype=float, copy=True),
        )

    xs = []
    ys = []
    for point in points:
        if isinstance(point, Point):
            xs.append(point.x)
            ys.append(point.y)
        else:
            x, y = point
            xs.append(x)
            ys.append(y)
    return np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)


def to_points(xs: Iterable[float], ys: Iterable[float]) -> list[Point]:
    """Zip two value sequences back into :class:`Point` records."""

    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]
