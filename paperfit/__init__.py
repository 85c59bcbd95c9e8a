"""Curve fitting and paper scale calculation for 2-D measurements."""

__version__ = "0.1.0"
