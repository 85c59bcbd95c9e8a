"""Input helpers for loading point data."""

from .loader import detect_columns, frame_to_points, load_many, load_points  # noqa: F401
