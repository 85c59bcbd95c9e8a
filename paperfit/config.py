"""Global constants shared by the fitting and scaling code."""
from __future__ import annotations

from typing import NamedTuple, Tuple


class PaperSize(NamedTuple):
    """Usable drawing area of a sheet, in centimetres (landscape order)."""

    width: float
    height: float

    def rotated(self) -> "PaperSize":
        return PaperSize(self.height, self.width)


# A4 is 29.7 x 21 cm; the margins leave a 26 x 16 cm grid.
A4_DRAWABLE = PaperSize(26.0, 16.0)

# Lineweaver-Burk intercepts below this are treated as zero (Vmax -> infinity).
SATURATION_EPSILON = 1e-10

# Display curve sampling
CURVE_STEPS = 50
CURVE_MARGIN = 0.1

SCALE_STEPS: Tuple[int, ...] = (1, 2, 5, 10)

DEFAULT_FIT_MODE = "optimal"
