"""tests/unit/test_modeling.py"""

from __future__ import annotations

import numpy as np
import pytest

from mortforecast.common.errors import InsufficientDataError
from mortforecast.modeling.linear import MIN_LINEAR_YEARS, fit_linear_trend
from mortforecast.modeling.smooth import DEFAULT_PENALTY_GRID, MIN_SMOOTH_YEARS, basis_size, fit_smooth_trend


def test_linear_two_points_extends_the_line() -> None:
    m = fit_linear_trend([2000, 2001], [100.0, 110.0])
    assert m.slope == pytest.approx(10.0)
    assert m.predict([2002]) == pytest.approx([120.0])


def test_linear_least_squares_with_noise() -> None:
    years = np.arange(2010, 2020)
    values = 50.0 + 2.0 * (years - 2010) + np.array([1, -1, 1, -1, 1, -1, 1, -1, 1, -1], dtype=float)
    m = fit_linear_trend(years, values)
    expected_slope, expected_intercept = np.polyfit(years - years.mean(), values, 1)
    assert m.slope == pytest.approx(expected_slope)
    assert m.intercept == pytest.approx(expected_intercept)


def test_linear_needs_two_distinct_years() -> None:
    with pytest.raises(InsufficientDataError) as exc:
        fit_linear_trend([2020, 2020], [1.0, 2.0], pop_size="Rural")
    assert exc.value.pop_size == "Rural"
    assert exc.value.n_years == 1
    assert exc.value.required == MIN_LINEAR_YEARS


def test_linear_length_mismatch_is_value_error() -> None:
    with pytest.raises(ValueError):
        fit_linear_trend([2020, 2021], [1.0])


def test_smooth_needs_minimum_distinct_years() -> None:
    with pytest.raises(InsufficientDataError) as exc:
        fit_smooth_trend([2000, 2000, 2001, 2001, 2002], [1.0, 1.1, 2.0, 2.1, 3.0], pop_size="Large Metro")
    assert exc.value.n_years == 3
    assert exc.value.required == MIN_SMOOTH_YEARS


def test_smooth_reproduces_a_straight_line_and_extrapolates_it() -> None:
    years = np.arange(2010, 2020)
    values = 700.0 - 3.5 * (years - 2010)
    m = fit_smooth_trend(years, values)

    assert m.predict(years) == pytest.approx(values, rel=1e-6)
    assert m.predict([2023, 2025]) == pytest.approx([700.0 - 3.5 * 13, 700.0 - 3.5 * 15], rel=1e-6)


def test_smooth_is_deterministic() -> None:
    years = np.arange(1999, 2021)
    values = 800.0 + 30.0 * np.sin((years - 1999) / 3.0) + 0.5 * (years - 1999)

    a = fit_smooth_trend(years, values)
    b = fit_smooth_trend(years, values)
    assert a.penalty == b.penalty
    np.testing.assert_array_equal(a.coef, b.coef)
    np.testing.assert_array_equal(a.predict([2021, 2022]), b.predict([2021, 2022]))


def test_smooth_basis_size_and_fit_summary() -> None:
    years = np.arange(2015, 2023)
    values = np.array([730.0, 728.5, 731.0, 723.6, 715.2, 828.7, 879.7, 798.8])

    m = fit_smooth_trend(years, values, max_basis=6)
    assert m.n_basis == basis_size(8, 6) == 5
    assert 2.0 - 1e-6 <= m.edf <= m.n_basis + 1e-6
    assert m.n_obs == len(years)
    assert np.isfinite(m.predict(range(2023, 2029))).all()


@pytest.mark.parametrize("n_distinct", range(MIN_SMOOTH_YEARS, 40))
def test_basis_is_always_smaller_than_the_number_of_years(n_distinct: int) -> None:
    assert 4 <= basis_size(n_distinct) < n_distinct
    assert basis_size(n_distinct) <= 10


def test_four_years_are_too_few_for_the_smoother() -> None:
    with pytest.raises(InsufficientDataError):
        fit_smooth_trend([2019, 2020, 2021, 2022], [715.2, 828.7, 879.7, 798.8])


def test_smooth_short_noisy_line_is_not_interpolated() -> None:
    # six years of a straight line plus noise orthogonal to every cubic
    # (fifth differences), so the smoothest fit is also the best one
    years = np.arange(2015, 2021)
    noise = np.array([-1.0, 5.0, -10.0, 10.0, -5.0, 1.0])
    line = 700.0 - 3.0 * (years - 2015)
    m = fit_smooth_trend(years, line + noise)

    assert m.n_basis < len(years)
    assert m.penalty > DEFAULT_PENALTY_GRID[0]
    assert m.edf < 3.0
    assert m.predict([2023, 2026]) == pytest.approx([700.0 - 3.0 * 8, 700.0 - 3.0 * 11], rel=1e-6)


def test_smooth_rejects_bad_settings() -> None:
    years = np.arange(2010, 2020)
    values = np.linspace(1.0, 2.0, len(years))
    with pytest.raises(ValueError):
        fit_smooth_trend(years, values, max_basis=3)
    with pytest.raises(ValueError):
        fit_smooth_trend(years, values, penalty_grid=[])
