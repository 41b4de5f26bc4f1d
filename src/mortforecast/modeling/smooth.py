"""
src/mortforecast/modeling/smooth.py

Penalised B-spline (P-spline) trend of value on year.

Fitting procedure:
- cubic B-spline basis with uniform knots over the observed years
  (sklearn SplineTransformer, linear extrapolation beyond the range);
  about half as many basis functions as distinct years, never enough
  to interpolate them
- second-order difference penalty on the coefficients, so straight lines
  are never penalised and a very large penalty recovers the OLS line
- smoothing parameter picked by generalised cross-validation over a fixed
  log-spaced grid; each candidate is an exact augmented least-squares
  solve (statsmodels OLS)

No random starts or seeds are involved: identical inputs give identical
coefficients. Extrapolated values are returned as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
import statsmodels.api as sm
from sklearn.preprocessing import SplineTransformer

from mortforecast.common.errors import InsufficientDataError


# smallest cubic basis with a curved component beyond the linear null space
MIN_BASIS = 4
# one more year than the smallest basis, so a fit never interpolates
MIN_SMOOTH_YEARS = MIN_BASIS + 1
DEFAULT_MAX_BASIS = 10
DEFAULT_PENALTY_GRID: tuple[float, ...] = tuple(float(v) for v in np.logspace(-4, 6, 41))


@dataclass(frozen=True, eq=False)
class SmoothTrendModel:
    basis: SplineTransformer
    coef: np.ndarray
    penalty: float
    edf: float
    gcv: float
    n_obs: int

    @property
    def n_basis(self) -> int:
        return int(self.coef.size)

    def predict(self, years: Iterable[int]) -> np.ndarray:
        x = np.asarray(list(years), dtype=float).reshape(-1, 1)
        return np.asarray(self.basis.transform(x) @ self.coef, dtype=float)


def basis_size(n_distinct: int, max_basis: int = DEFAULT_MAX_BASIS) -> int:
    """Basis dimension for n_distinct years; always below n_distinct once n_distinct >= MIN_SMOOTH_YEARS."""
    return min(int(max_basis), max(MIN_BASIS, n_distinct // 2 + 1))


def _difference_penalty(n_basis: int, order: int = 2) -> np.ndarray:
    return np.diff(np.eye(n_basis), n=order, axis=0)


def _fit_penalized(B: np.ndarray, y: np.ndarray, D: np.ndarray, penalty: float) -> tuple[np.ndarray, float, float]:
    """Solve min |y - B c|^2 + penalty * |D c|^2; return (coef, edf, rss)."""
    n = B.shape[0]
    X_aug = np.vstack([B, np.sqrt(penalty) * D])
    y_aug = np.concatenate([y, np.zeros(D.shape[0])])

    res = sm.OLS(y_aug, X_aug).fit()
    # leverages of the observed rows sum to the trace of the smoother matrix
    hat = np.asarray(res.get_influence().hat_matrix_diag, dtype=float)[:n]
    rss = float(np.sum(np.asarray(res.resid, dtype=float)[:n] ** 2))
    return np.asarray(res.params, dtype=float), float(hat.sum()), rss


def fit_smooth_trend(
    years: Iterable[int],
    values: Iterable[float],
    *,
    pop_size: str | None = None,
    max_basis: int = DEFAULT_MAX_BASIS,
    penalty_grid: Sequence[float] = DEFAULT_PENALTY_GRID,
) -> SmoothTrendModel:
    x = np.asarray(list(years), dtype=float)
    y = np.asarray(list(values), dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"years and values differ in length: {x.shape} vs {y.shape}")
    if int(max_basis) < MIN_BASIS:
        raise ValueError(f"max_basis must be >= {MIN_BASIS}")
    if len(penalty_grid) == 0 or any(float(p) <= 0 for p in penalty_grid):
        raise ValueError("penalty_grid must be a non-empty sequence of positive values")

    n_distinct = int(np.unique(x).size)
    if n_distinct < MIN_SMOOTH_YEARS:
        raise InsufficientDataError(pop_size, n_years=n_distinct, required=MIN_SMOOTH_YEARS, model="smooth")

    n_basis = basis_size(n_distinct, max_basis)
    basis = SplineTransformer(
        n_knots=n_basis - 2,
        degree=3,
        knots="uniform",
        extrapolation="linear",
        include_bias=True,
    )
    B = basis.fit_transform(x.reshape(-1, 1))
    D = _difference_penalty(B.shape[1])
    n = x.size

    best: tuple[float, float, np.ndarray, float] | None = None
    for penalty in penalty_grid:
        coef, edf, rss = _fit_penalized(B, y, D, float(penalty))
        denom = n - edf
        if denom <= 1e-8:
            continue
        gcv = n * rss / denom**2
        # strict "<" keeps the smallest penalty on ties
        if best is None or gcv < best[0]:
            best = (gcv, float(penalty), coef, edf)

    if best is None:
        raise ValueError(f"No admissible smoothing penalty for {pop_size!r}; widen penalty_grid")

    gcv, penalty, coef, edf = best
    return SmoothTrendModel(basis=basis, coef=coef, penalty=penalty, edf=edf, gcv=gcv, n_obs=int(n))
