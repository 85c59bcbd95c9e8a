"""Plot session state management."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from paperfit.analysis.scales import (
    Orientation,
    ScaleMode,
    ScaleResult,
    ScaleSet,
    calculate_scales,
)
from paperfit.analysis.trendlines import FittedModel, best_fit, fit_curve, is_valid_fit
from paperfit.config import A4_DRAWABLE, DEFAULT_FIT_MODE, PaperSize
from paperfit.models.points import Point

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """Everything derived from one recompute of a :class:`PlotSession`."""

    fit: Optional[FittedModel]
    scales: ScaleSet
    active_scale: Optional[ScaleResult]
    curve: Optional[Tuple[np.ndarray, np.ndarray]] = None

    @property
    def has_valid_fit(self) -> bool:
        return is_valid_fit(self.fit)


@dataclass
class PlotSession:
    """In-memory dataset and the user's fit and scale choices.

    Attributes
    ----------
    points:
        Data points in entry order.
    fit_mode:
        One of ``linear``, ``exponential``, ``logarithmic``, ``saturation``
        or ``optimal``.
    start_x, start_y:
        Optional axis origins overriding the data minimum.
    custom_x, custom_y:
        Optional literal units-per-centimetre values for custom scaling.
    scale_mode:
        ``auto`` or ``custom``.
    orientation:
        Sheet orientation used to pick the active scale.
    paper:
        Drawable area of the sheet in centimetres.
    """

    points: List[Point] = field(default_factory=list)
    fit_mode: str = DEFAULT_FIT_MODE
    start_x: Optional[float] = None
    start_y: Optional[float] = None
    custom_x: Optional[float] = None
    custom_y: Optional[float] = None
    scale_mode: str = ScaleMode.AUTO.value
    orientation: str = Orientation.LANDSCAPE.value
    paper: PaperSize = A4_DRAWABLE

    def add_point(self, x: float, y: float) -> Point:
        """Append a point; non-finite coordinates are rejected."""

        x, y = float(x), float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Point coordinates must be finite, got ({x}, {y})")
        point = Point(x, y)
        self.points.append(point)
        return point

    def remove_point(self, index: int) -> Point:
        """Remove and return the point at ``index``."""

        if not -len(self.points) <= index < len(self.points):
            raise IndexError(f"No point at index {index}")
        return self.points.pop(index)

    def clear(self) -> None:
        self.points.clear()

    def to_frame(self) -> pd.DataFrame:
        """Return the points as a two-column ``x``/``y`` DataFrame."""

        return pd.DataFrame(
            {"x": [p.x for p in self.points], "y": [p.y for p in self.points]},
            columns=["x", "y"],
            dtype=float,
        )

    def recompute(self) -> SessionResult:
        """Fit and scale the current points from scratch."""

        points = list(self.points)
        fit = best_fit(points, self.fit_mode) if len(points) >= 2 else None
        scales = calculate_scales(
            points,
            self.paper,
            start_x=self.start_x,
            start_y=self.start_y,
            custom_x=self.custom_x,
            custom_y=self.custom_y,
        )

        curve = None
        if is_valid_fit(fit):
            xs = [p.x for p in points]
            curve = fit_curve(fit, min(xs), max(xs))
        elif fit is not None:
            logger.debug("Fit %s has non-finite values; not drawing it", fit.model)

        return SessionResult(
            fit=fit,
            scales=scales,
            active_scale=scales.select(self.orientation, self.scale_mode),
            curve=curve,
        )
