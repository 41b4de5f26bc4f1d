"""src/mortforecast/modeling/__init__.py"""

from .linear import MIN_LINEAR_YEARS, LinearTrendModel, fit_linear_trend
from .smooth import (
    DEFAULT_MAX_BASIS,
    DEFAULT_PENALTY_GRID,
    MIN_BASIS,
    MIN_SMOOTH_YEARS,
    SmoothTrendModel,
    basis_size,
    fit_smooth_trend,
)

__all__ = [
    "MIN_LINEAR_YEARS",
    "LinearTrendModel",
    "fit_linear_trend",
    "MIN_BASIS",
    "MIN_SMOOTH_YEARS",
    "DEFAULT_MAX_BASIS",
    "DEFAULT_PENALTY_GRID",
    "SmoothTrendModel",
    "basis_size",
    "fit_smooth_trend",
]
