"""src/mortforecast/modeling/linear.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import statsmodels.api as sm

from mortforecast.common.errors import InsufficientDataError


MIN_LINEAR_YEARS = 2


@dataclass(frozen=True)
class LinearTrendModel:
    """
    Straight-line trend value = intercept + slope * (year - origin_year).

    Years are centred on origin_year (mean observed year) to keep the
    design matrix well conditioned.
    """
    intercept: float
    slope: float
    origin_year: float
    n_obs: int

    def predict(self, years: Iterable[int]) -> np.ndarray:
        x = np.asarray(list(years), dtype=float)
        return (self.intercept + self.slope * (x - self.origin_year)).astype(float)


def fit_linear_trend(years: Iterable[int], values: Iterable[float], *, pop_size: str | None = None) -> LinearTrendModel:
    """Ordinary least squares of value on year (closed form, deterministic)."""
    x = np.asarray(list(years), dtype=float)
    y = np.asarray(list(values), dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"years and values differ in length: {x.shape} vs {y.shape}")

    n_distinct = int(np.unique(x).size)
    if n_distinct < MIN_LINEAR_YEARS:
        raise InsufficientDataError(pop_size, n_years=n_distinct, required=MIN_LINEAR_YEARS, model="linear")

    origin = float(x.mean())
    X = sm.add_constant(x - origin, has_constant="add")
    res = sm.OLS(y, X).fit()
    intercept, slope = (float(v) for v in res.params)
    return LinearTrendModel(intercept=intercept, slope=slope, origin_year=origin, n_obs=int(x.size))
