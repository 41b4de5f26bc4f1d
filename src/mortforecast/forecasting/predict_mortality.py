"""src/mortforecast/forecasting/predict_mortality.py"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from mortforecast.common.errors import InsufficientDataError
from mortforecast.modeling.linear import fit_linear_trend
from mortforecast.modeling.smooth import DEFAULT_MAX_BASIS, fit_smooth_trend
from mortforecast.validation.schemas import ACTUAL, MORTALITY_LONG, PREDICTED, TABLE_COLUMNS, assert_schema, empty_table


logger = logging.getLogger(__name__)


ModelKind = Literal["linear", "smooth"]

_FITTERS: dict[str, Callable[..., Any]] = {
    "linear": fit_linear_trend,
    "smooth": fit_smooth_trend,
}
MODEL_KINDS: tuple[str, ...] = tuple(_FITTERS)


@dataclass(frozen=True)
class GroupFailure:
    pop_size: str
    model: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"Pop_Size": self.pop_size, "Model": self.model, "Reason": self.reason}


@dataclass(frozen=True)
class ForecastResult:
    """
    Predicted records for every group that could be fit, plus a report of
    the groups that could not.
    """
    model: str
    predicted: pd.DataFrame
    failures: tuple[GroupFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def failed_groups(self) -> list[str]:
        return [f.pop_size for f in self.failures]

    def failures_frame(self) -> pd.DataFrame:
        if not self.failures:
            return pd.DataFrame(columns=["Pop_Size", "Model", "Reason"])
        return pd.DataFrame([f.to_dict() for f in self.failures])


def horizon_years(start_year: int, end_year: int) -> list[int]:
    """Contiguous forecast horizon [start_year..end_year]."""
    start_year = int(start_year)
    end_year = int(end_year)
    if end_year < start_year:
        raise ValueError("end_year must be >= start_year")
    return list(range(start_year, end_year + 1))


def _check_horizon(horizon: Iterable[int]) -> list[int]:
    years = [int(y) for y in horizon]
    if not years:
        raise ValueError("Forecast horizon is empty.")
    if len(set(years)) != len(years):
        raise ValueError(f"Forecast horizon has duplicate years: {years}")
    return years


def _fit_group(
    pop_size: str,
    group: pd.DataFrame,
    years: list[int],
    model: str,
    fit_kwargs: dict[str, Any],
) -> pd.DataFrame | GroupFailure:
    try:
        fitted = _FITTERS[model](group["Year"], group["Value"], pop_size=pop_size, **fit_kwargs)
    except InsufficientDataError as e:
        return GroupFailure(pop_size=pop_size, model=model, reason=str(e))

    yhat = fitted.predict(years)
    category = sorted(group["Category"].astype(str).unique())[0]
    return pd.DataFrame(
        {
            "Category": category,
            "Pop_Size": pop_size,
            "Year": np.asarray(years, dtype=int),
            "Value": np.asarray(yhat, dtype=float),
            "Type": PREDICTED,
        }
    )[list(TABLE_COLUMNS)]


def fit_and_predict(
    table: pd.DataFrame,
    horizon: Iterable[int],
    *,
    model: ModelKind | str = "linear",
    n_jobs: int = 1,
    **fit_kwargs: Any,
) -> ForecastResult:
    """
    Fit one model per Pop_Size on the Actual records and predict each
    horizon year.

    Groups are fit independently (joblib threads when n_jobs != 1); a group
    with too few years is reported in ForecastResult.failures and the other
    groups still get predictions.
    """
    model = str(model).strip().lower()
    if model not in _FITTERS:
        raise ValueError(f"Unknown model: {model!r}. Expected one of {list(MODEL_KINDS)}")

    assert_schema(table, MORTALITY_LONG)
    years = _check_horizon(horizon)

    actual = table[table["Type"] == ACTUAL]
    groups = [(str(ps), g.sort_values("Year", kind="mergesort")) for ps, g in actual.groupby("Pop_Size", sort=True)]

    outcomes = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_fit_group)(ps, g, years, model, fit_kwargs) for ps, g in groups
    )

    frames = [o for o in outcomes if isinstance(o, pd.DataFrame)]
    failures = tuple(o for o in outcomes if isinstance(o, GroupFailure))

    for f in failures:
        logger.warning("Skipping group %s: %s", f.pop_size, f.reason)
    if failures:
        logger.warning("%s forecast skipped %d group(s): %s", model, len(failures), ", ".join(f.pop_size for f in failures))

    predicted = pd.concat(frames, ignore_index=True) if frames else empty_table()
    logger.info("%s forecast: %d group(s) fit, %d predicted record(s)", model, len(frames), len(predicted))
    return ForecastResult(model=model, predicted=predicted, failures=failures)


def predict_linear(table: pd.DataFrame, horizon: Iterable[int], *, n_jobs: int = 1) -> ForecastResult:
    """OLS trend per Pop_Size."""
    return fit_and_predict(table, horizon, model="linear", n_jobs=n_jobs)


def predict_smooth(
    table: pd.DataFrame,
    horizon: Iterable[int],
    *,
    n_jobs: int = 1,
    max_basis: int = DEFAULT_MAX_BASIS,
) -> ForecastResult:
    """Penalised spline trend per Pop_Size."""
    return fit_and_predict(table, horizon, model="smooth", n_jobs=n_jobs, max_basis=max_basis)
