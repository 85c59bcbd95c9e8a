"""Tests for CSV point loading."""
from __future__ import annotations

import pandas as pd
import pytest

from paperfit.io.loader import detect_columns, frame_to_points, load_many, load_points
from paperfit.models.points import Point


def test_detect_columns_aliases() -> None:
    df = pd.DataFrame({"Substrate": [1.0], "Velocity": [2.0], "note": ["a"]})
    assert detect_columns(df) == {"x": "Substrate", "y": "Velocity"}


def test_detect_columns_numeric_fallback() -> None:
    df = pd.DataFrame({"label": ["a", "b"], "first": [1.0, 2.0], "second": [3.0, 4.0]})
    assert detect_columns(df) == {"x": "first", "y": "second"}


def test_detect_columns_requires_two_numeric() -> None:
    df = pd.DataFrame({"label": ["a", "b"], "only": [1.0, 2.0]})
    with pytest.raises(ValueError):
        detect_columns(df)


def test_frame_to_points_drops_incomplete_rows() -> None:
    df = pd.DataFrame({"x": ["1", "2", "oops", "4"], "y": [1.0, None, 3.0, 8.0]})
    assert frame_to_points(df) == [Point(1.0, 1.0), Point(4.0, 8.0)]


def test_load_points_roundtrip(tmp_path) -> None:
    path = tmp_path / "data.csv"
    path.write_text("Time,Value\n0,1.5\n1,2.5\n2,4.0\n", encoding="utf-8")
    assert load_points(path) == [Point(0.0, 1.5), Point(1.0, 2.5), Point(2.0, 4.0)]


def test_load_many_concatenates(tmp_path) -> None:
    a = tmp_path / "a.csv"
    b = tmp_path / "b.csv"
    a.write_text("x,y\n1,1\n", encoding="utf-8")
    b.write_text("x,y\n2,4\n", encoding="utf-8")
    assert load_many([a, str(b)]) == [Point(1.0, 1.0), Point(2.0, 4.0)]
