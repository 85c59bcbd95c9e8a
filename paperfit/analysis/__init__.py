"""Fitting, model selection and scale calculation."""

from .scales import (  # noqa: F401
    CustomScale,
    Orientation,
    ScaleMode,
    ScaleResult,
    ScaleSet,
    calculate_scale,
    calculate_scales,
    distance_on_paper,
    standard_scale,
)
from .statistics import coefficient_of_determination, mean, total  # noqa: F401
from .trendlines import (  # noqa: F401
    FITTERS,
    FitMode,
    FittedModel,
    best_fit,
    fit_curve,
    fit_exponential,
    fit_linear,
    fit_logarithmic,
    fit_saturation,
    is_valid_fit,
)
