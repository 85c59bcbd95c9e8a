"""Trendline fitting and model selection.

Every model is fitted through a linearizing transform followed by an ordinary
least-squares line:

==============  ======================  =====================
model           equation                regression
==============  ======================  =====================
linear          y = m*x + c             y on x
exponential     y = a*e^(b*x)           ln(y) on x
logarithmic     y = a + b*ln(x)         y on ln(x)
saturation      y = Vmax*x / (Km + x)   1/y on 1/x
==============  ======================  =====================
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from paperfit.analysis.statistics import coefficient_of_determination, total
from paperfit.config import CURVE_MARGIN, CURVE_STEPS, SATURATION_EPSILON
from paperfit.models.points import PointsInput, as_xy

logger = logging.getLogger(__name__)

Predictor = Callable[[Union[float, np.ndarray]], Union[float, np.ndarray]]
Mask = Callable[[np.ndarray, np.ndarray], np.ndarray]
Transform = Callable[[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]


class FitMode(str, Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"
    SATURATION = "saturation"
    OPTIMAL = "optimal"


@dataclass
class FittedModel:
    """Result of a single trendline fit.

    Attributes
    ----------
    model:
        Model family name (``linear``, ``exponential``, ``logarithmic`` or
        ``saturation``).
    predict:
        Callable evaluating the fitted curve at a scalar or an array.
    equation:
        Human-readable equation with coefficients rounded to four decimals.
    r2:
        Coefficient of determination over the points the model accepted.
        Reported unclamped; may be negative or non-finite.
    params:
        Model coefficients keyed by name.
    n_points:
        Number of points that survived domain filtering.
    """

    model: str
    predict: Predictor
    equation: str
    r2: float
    params: Dict[str, float] = field(default_factory=dict)
    n_points: int = 0

    @property
    def type(self) -> str:
        return self.model

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-safe summary without the predict callable."""

        return {
            "model": self.model,
            "equation": self.equation,
            "r2": float(self.r2),
            "params": {k: float(v) for k, v in self.params.items()},
        }


def _regress(u: np.ndarray, v: np.ndarray) -> Tuple[float, float]:
    """Least-squares slope and intercept of ``v`` against ``u``.

    Identical ``u`` values leave the denominator at zero and give a
    non-finite slope instead of raising.
    """

    n = u.size
    sum_u = total(u)
    sum_v = total(v)
    sum_uv = total(u * v)
    sum_uu = total(u * u)
    denominator = n * sum_uu - sum_u * sum_u
    if np.all(u == u[0]):
        denominator = np.float64(0.0)
    with np.errstate(divide="ignore", invalid="ignore"):
        slope = (n * sum_uv - sum_u * sum_v) / denominator
        intercept = (sum_v - slope * sum_u) / n
    return float(slope), float(intercept)


def _fit_transformed(
    points: PointsInput,
    model: str,
    build: Callable[[float, float], Optional[Tuple[Predictor, Dict[str, float], str]]],
    keep: Optional[Mask] = None,
    transform: Optional[Transform] = None,
) -> Optional[FittedModel]:
    """Linearize, regress and un-transform.

    ``keep`` selects the points inside the model's domain, ``transform`` maps
    them onto a straight line and ``build`` turns the regression slope and
    intercept back into the model's predictor, parameters and equation (or
    ``None`` when the coefficients are unusable).
    """

    x, y = as_xy(points)
    if keep is not None:
        mask = keep(x, y)
        x, y = x[mask], y[mask]
    if x.size < 2:
        logger.debug("%s fit skipped: %d usable point(s)", model, x.size)
        return None

    with np.errstate(divide="ignore", invalid="ignore"):
        u, v = transform(x, y) if transform is not None else (x, y)
    slope, intercept = _regress(u, v)

    built = build(slope, intercept)
    if built is None:
        logger.debug("%s fit rejected (slope=%r, intercept=%r)", model, slope, intercept)
        return None
    predict, params, equation = built
    r2 = coefficient_of_determination(list(zip(x, y)), predict)
    return FittedModel(model, predict, equation, r2, params, int(x.size))


# ------------------------------------------------------------------ models
def _build_linear(slope: float, intercept: float):
    def predict(x):
        return slope * np.asarray(x, dtype=float) + intercept

    equation = f"y = {slope:.4f}x + {intercept:.4f}"
    return predict, {"slope": slope, "intercept": intercept}, equation


def _build_exponential(slope: float, intercept: float):
    b = slope
    with np.errstate(over="ignore"):
        a = float(np.exp(intercept))

    def predict(x):
        with np.errstate(over="ignore", invalid="ignore"):
            return a * np.exp(b * np.asarray(x, dtype=float))

    return predict, {"a": a, "b": b}, f"y = {a:.4f}e^({b:.4f}x)"


def _build_logarithmic(slope: float, intercept: float):
    a, b = intercept, slope

    # nan for x <= 0
    def predict(x):
        with np.errstate(divide="ignore", invalid="ignore"):
            return a + b * np.log(np.asarray(x, dtype=float))

    return predict, {"a": a, "b": b}, f"y = {a:.4f} + {b:.4f} * ln(x)"


def _build_saturation(slope: float, intercept: float):
    if abs(intercept) < SATURATION_EPSILON:
        return None
    vmax = 1.0 / intercept
    km = slope * vmax

    def predict(x):
        arr = np.asarray(x, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            return (vmax * arr) / (km + arr)

    return predict, {"vmax": vmax, "km": km}, f"y = ({vmax:.4f}x) / ({km:.4f} + x)"


def fit_linear(points: PointsInput) -> Optional[FittedModel]:
    """Fit ``y = m*x + c``. Uses every point."""

    return _fit_transformed(points, "linear", _build_linear)


def fit_exponential(points: PointsInput) -> Optional[FittedModel]:
    """Fit ``y = a*e^(b*x)`` on the points with ``y > 0``."""

    return _fit_transformed(
        points,
        "exponential",
        _build_exponential,
        keep=lambda x, y: y > 0,
        transform=lambda x, y: (x, np.log(y)),
    )


def fit_logarithmic(points: PointsInput) -> Optional[FittedModel]:
    """Fit ``y = a + b*ln(x)`` on the points with ``x > 0``."""

    return _fit_transformed(
        points,
        "logarithmic",
        _build_logarithmic,
        keep=lambda x, y: x > 0,
        transform=lambda x, y: (np.log(x), y),
    )


def fit_saturation(points: PointsInput) -> Optional[FittedModel]:
    """Fit the Michaelis-Menten curve via the Lineweaver-Burk transform.

    Points with ``x == 0`` or ``y == 0`` are dropped. A near-zero intercept
    (``Vmax`` tending to infinity) rejects the fit.
    """

    return _fit_transformed(
        points,
        "saturation",
        _build_saturation,
        keep=lambda x, y: (x != 0) & (y != 0),
        transform=lambda x, y: (1.0 / x, 1.0 / y),
    )


# Evaluation order doubles as the tie-break order in optimal mode.
FITTERS: Dict[str, Callable[[PointsInput], Optional[FittedModel]]] = {
    FitMode.LINEAR.value: fit_linear,
    FitMode.EXPONENTIAL.value: fit_exponential,
    FitMode.LOGARITHMIC.value: fit_logarithmic,
    FitMode.SATURATION.value: fit_saturation,
}


# ---------------------------------------------------------------- selection
def parse_fit_mode(mode: Union[str, FitMode]) -> FitMode:
    if isinstance(mode, FitMode):
        return mode
    try:
        return FitMode(str(mode).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown fit mode: {mode!r}") from None


def _rank(fit: FittedModel) -> float:
    return fit.r2 if np.isfinite(fit.r2) else -np.inf


def best_fit(points: PointsInput, mode: Union[str, FitMode] = FitMode.OPTIMAL) -> Optional[FittedModel]:
    """Fit the requested model, or the highest-r2 model in ``optimal`` mode.

    Returns ``None`` for fewer than two points or when the requested model
    cannot be fitted. In ``optimal`` mode a model whose r2 is not finite only
    wins when no model has a finite r2; exact ties keep the earlier model in
    :data:`FITTERS` order.
    """

    fit_mode = parse_fit_mode(mode)
    x, y = as_xy(points)
    if x.size < 2:
        return None
    data = list(zip(x, y))

    if fit_mode is not FitMode.OPTIMAL:
        return FITTERS[fit_mode.value](data)

    candidates = [fit for fit in (fitter(data) for fitter in FITTERS.values()) if fit is not None]
    if not candidates:
        logger.debug("No model fitted; falling back to linear")
        return fit_linear(data)

    best = candidates[0]
    for candidate in candidates[1:]:
        if _rank(candidate) > _rank(best):
            best = candidate
    logger.debug(
        "Optimal fit: %s (r2=%s) among %s",
        best.model,
        best.r2,
        ", ".join(f"{c.model}={c.r2:.4f}" for c in candidates),
    )
    return best


def is_valid_fit(fit: Optional[FittedModel]) -> bool:
    """Return ``True`` when ``fit`` exists and has finite r2 and parameters."""

    if fit is None:
        return False
    values = [fit.r2, *fit.params.values()]
    return bool(np.all(np.isfinite(values)))


def fit_curve(
    fit: FittedModel,
    x_min: float,
    x_max: float,
    steps: int = CURVE_STEPS,
    margin: float = CURVE_MARGIN,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sample ``fit`` for drawing over the data range plus a margin.

    Abscissae outside the model's domain (``x <= 0`` for logarithmic,
    ``x == -Km`` for saturation) and non-finite ordinates are skipped.
    """

    span = (x_max - x_min) or 1.0
    step = span / steps
    start = x_min - span * margin
    end = x_max + span * margin
    count = int(np.floor((end - start) / step + 1e-9)) + 1
    xs = start + step * np.arange(count, dtype=float)

    if fit.model == FitMode.LOGARITHMIC.value:
        xs = xs[xs > 0]
    elif fit.model == FitMode.SATURATION.value:
        xs = xs[xs != -fit.params.get("km", np.nan)]

    ys = np.asarray(fit.predict(xs), dtype=float)
    finite = np.isfinite(ys)
    return xs[finite], ys[finite]
