"""CSV loading utilities for point data."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from paperfit.models.points import Point, to_points

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {
    "x": {"x", "x_value", "time", "t", "concentration", "substrate", "s", "dose"},
    "y": {"y", "y_value", "value", "rate", "velocity", "v", "response", "signal"},
}


def _normalize_column_name(name: str) -> str:
    return str(name).strip().lower().replace(" ", "_")


def detect_columns(df: pd.DataFrame) -> Dict[str, str]:
    """Map ``x`` and ``y`` onto columns of ``df``.

    Aliased names win; otherwise the first two columns holding any numeric
    value are used, in order.
    """

    result: Dict[str, str] = {}
    for col in df.columns:
        norm = _normalize_column_name(col)
        for canonical, aliases in COLUMN_ALIASES.items():
            if norm in aliases and canonical not in result:
                result[canonical] = col
                break
    if len(result) == 2:
        return result

    taken = set(result.values())
    numeric = [
        col
        for col in df.columns
        if col not in taken and pd.to_numeric(df[col], errors="coerce").notna().any()
    ]
    for canonical in ("x", "y"):
        if canonical not in result and numeric:
            result[canonical] = numeric.pop(0)
    if len(result) < 2:
        raise ValueError("Could not find two numeric columns for x and y")
    return result


def frame_to_points(df: pd.DataFrame, columns: Optional[Dict[str, str]] = None) -> List[Point]:
    """Convert ``df`` to points, dropping rows without numeric x and y."""

    columns = columns or detect_columns(df)
    xy = pd.DataFrame(
        {
            "x": pd.to_numeric(df[columns["x"]], errors="coerce"),
            "y": pd.to_numeric(df[columns["y"]], errors="coerce"),
        }
    ).dropna()
    dropped = len(df) - len(xy)
    if dropped:
        logger.info("Dropped %d row(s) without numeric x/y", dropped)
    return to_points(xy["x"], xy["y"])


def load_points(path: Union[str, Path]) -> List[Point]:
    """Load a CSV file of x/y pairs."""

    path = Path(path)
    df = pd.read_csv(path)
    points = frame_to_points(df)
    logger.info("Loaded %d point(s) from %s", len(points), path.name)
    return points


def load_many(paths: Iterable[Union[str, Path]]) -> List[Point]:
    """Load and concatenate several CSV files into one point list."""

    points: List[Point] = []
    for path in paths:
        points.extend(load_points(path))
    return points
