"""src/mortforecast/forecasting/__init__.py"""

from .combine import combine_series
from .predict_mortality import (
    MODEL_KINDS,
    ForecastResult,
    GroupFailure,
    fit_and_predict,
    horizon_years,
    predict_linear,
    predict_smooth,
)

__all__ = [
    "MODEL_KINDS",
    "ForecastResult",
    "GroupFailure",
    "horizon_years",
    "fit_and_predict",
    "predict_linear",
    "predict_smooth",
    "combine_series",
]
