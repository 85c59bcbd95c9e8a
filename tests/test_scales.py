"""Unit tests for paper scale calculation."""
from __future__ import annotations

import math

import pytest

from paperfit.analysis.scales import (
    Orientation,
    ScaleResult,
    ScaleSet,
    calculate_scale,
    calculate_scales,
    distance_on_paper,
    standard_scale,
)
from paperfit.config import A4_DRAWABLE, PaperSize


def approx(a: float, b: float, tol: float = 1e-9) -> bool:
    return abs(a - b) <= tol


@pytest.mark.parametrize(
    "value_range, length, expected",
    [
        (37, 10, 5),
        (10, 10, 1),
        (11, 10, 2),
        (20, 10, 2),
        (21, 10, 5),
        (51, 10, 10),
        (0.37, 10, 0.05),
        (1200, 26, 50),
        (3, 16, 0.2),
    ],
)
def test_standard_scale_steps(value_range: float, length: float, expected: float) -> None:
    assert approx(standard_scale(value_range, length), expected)


def test_standard_scale_zero_range() -> None:
    assert standard_scale(0, 10) == 0


def test_standard_scale_fits_range() -> None:
    for value_range in (0.013, 1.7, 42.0, 999.0, 12345.6):
        scale = standard_scale(value_range, 16)
        assert scale * 16 >= value_range * (1 - 1e-12)


def test_calculate_scale_basic() -> None:
    points = [(0.0, 0.0), (52.0, 3.0), (20.0, 1.0)]
    result = calculate_scale(points, 26, 16)
    assert result == ScaleResult(x_per_cm=2.0, y_per_cm=0.2, start_x=0.0, start_y=0.0)


def test_calculate_scale_start_override() -> None:
    points = [(10.0, 5.0), (20.0, 15.0)]
    result = calculate_scale(points, 10, 10, start_x=0.0, start_y=float("nan"))
    assert result.start_x == 0.0
    assert result.x_per_cm == 2.0
    assert result.start_y == 5.0
    assert result.y_per_cm == 1.0


def test_calculate_scale_override_never_moves_max() -> None:
    points = [(1.0, 1.0), (2.0, 2.0)]
    assert calculate_scale(points, 10, 10, start_x=5.0) is None


def test_calculate_scale_identical_x() -> None:
    assert calculate_scale([(3.0, 1.0), (3.0, 2.0), (3.0, 9.0)], 26, 16) is None


def test_calculate_scale_identical_y() -> None:
    assert calculate_scale([(1.0, 4.0), (2.0, 4.0)], 26, 16) is None


def test_calculate_scale_single_point() -> None:
    assert calculate_scale([(1.0, 2.0)], 26, 16, start_x=0.0, start_y=0.0) is None


def test_calculate_scales_orientations() -> None:
    points = [(0.0, 0.0), (100.0, 100.0)]
    scales = calculate_scales(points)
    assert scales.landscape.x_per_cm == 5.0
    assert scales.landscape.y_per_cm == 10.0
    assert scales.portrait.x_per_cm == 10.0
    assert scales.portrait.y_per_cm == 5.0
    assert not scales.custom.active


def test_calculate_scales_custom_override() -> None:
    points = [(2.0, 3.0), (12.0, 30.0)]
    scales = calculate_scales(points, custom_x=0.5, custom_y=3.0, start_y=0.0)
    assert scales.custom.active
    assert scales.custom.x_per_cm == 0.5
    assert scales.custom.y_per_cm == 3.0
    assert scales.custom.start_x == 2.0
    assert scales.custom.start_y == 0.0


def test_custom_needs_both_values() -> None:
    scales = calculate_scales([(0.0, 0.0), (1.0, 1.0)], custom_x=2.0)
    assert not scales.custom.active
    assert scales.select("landscape", "custom") is None


def test_custom_without_landscape_starts_at_zero() -> None:
    scales = calculate_scales([(1.0, 1.0)], custom_x=1.0, custom_y=1.0)
    assert scales.landscape is None
    assert scales.custom.start_x == 0.0
    assert scales.custom.start_y == 0.0


def test_select_orientation() -> None:
    scales = calculate_scales([(0.0, 0.0), (100.0, 100.0)], paper=PaperSize(20, 10))
    assert scales.select(Orientation.PORTRAIT) is scales.portrait
    assert scales.select("landscape", "auto") is scales.landscape
    with pytest.raises(ValueError):
        scales.select("sideways")


def test_empty_scale_set() -> None:
    assert ScaleSet().select() is None


def test_distance_on_paper() -> None:
    scale = ScaleResult(x_per_cm=2.0, y_per_cm=0.5, start_x=10.0, start_y=1.0)
    dx, dy = distance_on_paper(14.0, 3.0, scale)
    assert approx(dx, 2.0)
    assert approx(dy, 4.0)


def test_distance_on_paper_unusable_scale() -> None:
    assert distance_on_paper(1.0, 1.0, None) is None
    zero = ScaleResult(x_per_cm=0.0, y_per_cm=1.0, start_x=0.0, start_y=0.0)
    assert distance_on_paper(1.0, 1.0, zero) is None
    nan = ScaleResult(x_per_cm=math.nan, y_per_cm=1.0, start_x=0.0, start_y=0.0)
    assert distance_on_paper(1.0, 1.0, nan) is None


def test_a4_drawable_area() -> None:
    assert A4_DRAWABLE == PaperSize(26.0, 16.0)
    assert A4_DRAWABLE.rotated() == PaperSize(16.0, 26.0)


def test_standard_scale_degenerate_length() -> None:
    assert standard_scale(5.0, 0.0) == math.inf
    assert math.isnan(standard_scale(-5.0, 10.0))


def test_infinite_start_override_is_ignored() -> None:
    result = calculate_scale([(0.0, 0.0), (10.0, 10.0)], 26.0, 16.0, start_x=-math.inf)
    assert result.start_x == 0.0
    assert result.x_per_cm == standard_scale(10.0, 26.0) == 0.5


def test_infinite_custom_value_leaves_custom_inactive() -> None:
    scales = calculate_scales([(0.0, 0.0), (10.0, 10.0)], custom_x=math.inf, custom_y=1.0)
    assert not scales.custom.active
    assert scales.select("landscape", "custom") is None


def test_overflowing_range_gives_no_scale() -> None:
    # 1e308 - (-1e308) overflows to inf
    scales = calculate_scales([(-1e308, 0.0), (1e308, 1.0)])
    assert scales.landscape is None
    assert scales.portrait is None
