"""Command line entry point: fit and scale a CSV of points."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from paperfit.analysis.scales import Orientation, ScaleMode, ScaleResult, distance_on_paper
from paperfit.analysis.trendlines import FitMode
from paperfit.io.loader import load_many
from paperfit.logging_config import setup_logging
from paperfit.models.session import PlotSession

logger = logging.getLogger("paperfit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperfit",
        description="Fit a trendline to x/y data and suggest A4 graph paper scales.",
    )
    parser.add_argument("paths", nargs="+", help="CSV file(s) with x and y columns")
    parser.add_argument(
        "--mode",
        default=FitMode.OPTIMAL.value,
        choices=[m.value for m in FitMode],
        help="Model to fit (default: optimal)",
    )
    parser.add_argument("--start-x", type=float, default=None, help="Force the x axis origin")
    parser.add_argument("--start-y", type=float, default=None, help="Force the y axis origin")
    parser.add_argument("--custom-x", type=float, default=None, help="Custom x units per cm")
    parser.add_argument("--custom-y", type=float, default=None, help="Custom y units per cm")
    parser.add_argument(
        "--orientation",
        default=Orientation.LANDSCAPE.value,
        choices=[o.value for o in Orientation],
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _format_scale(scale: Optional[ScaleResult]) -> str:
    if scale is None:
        return "--"
    return f"X: 1cm = {scale.x_per_cm:g} units, Y: 1cm = {scale.y_per_cm:g} units"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        points = load_many(args.paths)
    except (OSError, ValueError) as exc:
        print(f"Could not read input: {exc}", file=sys.stderr)
        return 1

    has_custom = args.custom_x is not None and args.custom_y is not None
    session = PlotSession(
        points=points,
        fit_mode=args.mode,
        start_x=args.start_x,
        start_y=args.start_y,
        custom_x=args.custom_x,
        custom_y=args.custom_y,
        scale_mode=ScaleMode.CUSTOM.value if has_custom else ScaleMode.AUTO.value,
        orientation=args.orientation,
    )
    result = session.recompute()

    if len(points) < 2:
        print("Equation: Need >1 point")
        print("R2: 0.000")
    elif result.fit is None:
        print("Equation: Invalid Data for Fit")
        print("R2: ---")
    else:
        print(f"Model: {result.fit.model}")
        print(f"Equation: {result.fit.equation}")
        print(f"R2: {result.fit.r2:.4f}")
        if not result.has_valid_fit:
            logger.warning("Fit contains non-finite values; do not plot it")

    print(f"Landscape: {_format_scale(result.scales.landscape)}")
    print(f"Portrait: {_format_scale(result.scales.portrait)}")
    if result.scales.custom.active:
        print(f"Custom: {_format_scale(result.scales.custom.as_result())}")

    if result.active_scale is not None:
        label = "Custom" if has_custom else f"A4 {args.orientation.capitalize()}"
        print(f"Distance ({label}):")
        for point in points:
            distance = distance_on_paper(point.x, point.y, result.active_scale)
            if distance is not None:
                print(f"  ({point.x:.2f}, {point.y:.2f}) -> X: {distance[0]:.2f} cm, Y: {distance[1]:.2f} cm")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
