"""Paper scale calculation.

Maps the value range of a dataset onto a fixed drawing area using round
"units per centimetre" steps from the 1-2-5 series, the way graph paper
is usually ruled.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from paperfit.config import A4_DRAWABLE, SCALE_STEPS, PaperSize
from paperfit.models.points import PointsInput, as_xy

logger = logging.getLogger(__name__)


class Orientation(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class ScaleMode(str, Enum):
    AUTO = "auto"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ScaleResult:
    """Units per centimetre and axis origin for one orientation."""

    x_per_cm: float
    y_per_cm: float
    start_x: float
    start_y: float


@dataclass(frozen=True)
class CustomScale:
    """Scale values typed in by the user, bypassing the 1-2-5 rounding."""

    active: bool = False
    x_per_cm: float = float("nan")
    y_per_cm: float = float("nan")
    start_x: float = 0.0
    start_y: float = 0.0

    def as_result(self) -> Optional[ScaleResult]:
        if not self.active:
            return None
        return ScaleResult(self.x_per_cm, self.y_per_cm, self.start_x, self.start_y)


@dataclass(frozen=True)
class ScaleSet:
    """Scales computed for one dataset in both orientations."""

    landscape: Optional[ScaleResult] = None
    portrait: Optional[ScaleResult] = None
    custom: CustomScale = field(default_factory=CustomScale)

    def select(
        self,
        orientation: Union[str, Orientation] = Orientation.LANDSCAPE,
        mode: Union[str, ScaleMode] = ScaleMode.AUTO,
    ) -> Optional[ScaleResult]:
        """Return the scale in effect for the chosen orientation and mode."""

        orientation = Orientation(str(getattr(orientation, "value", orientation)).lower())
        mode = ScaleMode(str(getattr(mode, "value", mode)).lower())
        if mode is ScaleMode.CUSTOM:
            return self.custom.as_result()
        if orientation is Orientation.LANDSCAPE:
            return self.landscape
        return self.portrait


def _given(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def standard_scale(value_range: float, available_length: float) -> float:
    """Smallest 1-2-5 step per unit length that fits ``value_range``.

    >>> standard_scale(37, 10)
    5.0
    >>> standard_scale(0, 10)
    0
    """

    if value_range == 0:
        return 0
    with np.errstate(divide="ignore", invalid="ignore"):
        raw = float(np.float64(value_range) / available_length)
    if not (math.isfinite(raw) and raw > 0):
        # inf for a zero-length area, nan for negative or undefined input
        return math.inf if raw == math.inf else math.nan
    magnitude = 10.0 ** math.floor(math.log10(raw))
    normalized = raw / magnitude
    step = next((s for s in SCALE_STEPS if normalized <= s), SCALE_STEPS[-1])
    return step * magnitude


def _axis_bounds(values: np.ndarray, start: Optional[float]) -> Tuple[float, float]:
    low = float(start) if _given(start) else float(np.min(values))
    return low, float(np.max(values))


def calculate_scale(
    points: PointsInput,
    width: float,
    height: float,
    start_x: Optional[float] = None,
    start_y: Optional[float] = None,
) -> Optional[ScaleResult]:
    """Compute per-axis scales for a drawing area of ``width`` x ``height``.

    ``start_x``/``start_y`` replace the observed minimum of their axis when
    given; the maximum is always the observed one. Returns ``None`` for fewer
    than two points or when either axis has no positive, finite range.
    """

    x, y = as_xy(points)
    if x.size < 2:
        return None

    min_x, max_x = _axis_bounds(x, start_x)
    min_y, max_y = _axis_bounds(y, start_y)
    range_x = max_x - min_x
    range_y = max_y - min_y
    if not (0 < range_x < math.inf and 0 < range_y < math.inf):
        logger.debug("No scale: range_x=%s range_y=%s", range_x, range_y)
        return None

    return ScaleResult(
        x_per_cm=standard_scale(range_x, width),
        y_per_cm=standard_scale(range_y, height),
        start_x=min_x,
        start_y=min_y,
    )


def calculate_scales(
    points: PointsInput,
    paper: PaperSize = A4_DRAWABLE,
    start_x: Optional[float] = None,
    start_y: Optional[float] = None,
    custom_x: Optional[float] = None,
    custom_y: Optional[float] = None,
) -> ScaleSet:
    """Landscape, portrait and custom scales for one dataset."""

    landscape = calculate_scale(points, paper.width, paper.height, start_x, start_y)
    portrait = calculate_scale(points, *paper.rotated(), start_x, start_y)

    custom = CustomScale()
    if _given(custom_x) and _given(custom_y):
        custom = CustomScale(
            active=True,
            x_per_cm=float(custom_x),
            y_per_cm=float(custom_y),
            start_x=float(start_x) if _given(start_x) else (landscape.start_x if landscape else 0.0),
            start_y=float(start_y) if _given(start_y) else (landscape.start_y if landscape else 0.0),
        )
    return ScaleSet(landscape=landscape, portrait=portrait, custom=custom)


def distance_on_paper(x: float, y: float, scale: Optional[ScaleResult]) -> Optional[Tuple[float, float]]:
    """Position of ``(x, y)`` on the sheet in centimetres from the origin."""

    if scale is None:
        return None
    steps = (scale.x_per_cm, scale.y_per_cm)
    if not all(math.isfinite(s) and s != 0 for s in steps):
        return None
    return (x - scale.start_x) / scale.x_per_cm, (y - scale.start_y) / scale.y_per_cm
