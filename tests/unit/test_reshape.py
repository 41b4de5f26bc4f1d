"""tests/unit/test_reshape.py"""

from __future__ import annotations

import pandas as pd
import pytest

from mortforecast.common.errors import ParseError, UnknownCategoryError
from mortforecast.preprocessing.reshape import (
    DEFAULT_ALLOWED_CATEGORIES,
    canonical_pop_size,
    detect_year_columns,
    reshape_wide,
)
from mortforecast.validation.schemas import TABLE_COLUMNS


def test_detect_year_columns_keeps_source_order() -> None:
    cols = ["Category", "Pop_Size", "2021", "2020", "Notes", 2019]
    assert detect_year_columns(cols) == ["2021", "2020", 2019]


def test_reshape_row_count_is_rows_times_years(wide_table: pd.DataFrame) -> None:
    out = reshape_wide(wide_table)

    year_cols = detect_year_columns(wide_table.columns)
    retained = int(wide_table["Category"].isin(DEFAULT_ALLOWED_CATEGORIES).sum())
    assert len(out) == retained * len(year_cols)
    assert list(out.columns) == list(TABLE_COLUMNS)
    assert set(out["Type"]) == {"Actual"}


def test_reshape_drops_categories_outside_allowed_set(wide_table: pd.DataFrame) -> None:
    out = reshape_wide(wide_table)
    assert "Sex" not in set(out["Category"])

    only_rural = reshape_wide(wide_table, allowed_categories={"Rural"})
    assert set(only_rural["Pop_Size"]) == {"Rural"}


def test_reshape_orders_by_source_row_then_year_column() -> None:
    wide = pd.DataFrame(
        {
            "Category": ["Rural", "Large Metro"],
            "Pop_Size": ["Rural", "Large Metro"],
            "2021": ["2", "20"],
            "2020": ["1", "10"],
        }
    )
    out = reshape_wide(wide)
    assert out["Pop_Size"].tolist() == ["Rural", "Rural", "Large Metro", "Large Metro"]
    assert out["Year"].tolist() == [2021, 2020, 2021, 2020]
    assert out["Value"].tolist() == [2.0, 1.0, 20.0, 10.0]


def test_reshape_end_to_end_values() -> None:
    wide = pd.DataFrame(
        {
            "Category": ["Rural"],
            "Pop_Size": ["Rural"],
            "2020": ["300 (CI 290-310)"],
            "2021": ["310 (CI 300-320)"],
        }
    )
    out = reshape_wide(wide)
    assert out[["Pop_Size", "Year", "Value"]].to_dict(orient="records") == [
        {"Pop_Size": "Rural", "Year": 2020, "Value": 300.0},
        {"Pop_Size": "Rural", "Year": 2021, "Value": 310.0},
    ]


def test_reshape_excludes_unknown_pop_size() -> None:
    wide = pd.DataFrame(
        {
            "Category": ["Rural", "Rural"],
            "Pop_Size": ["Rural", "Suburban"],
            "2020": ["1", "2"],
        }
    )
    out = reshape_wide(wide)
    assert out["Pop_Size"].tolist() == ["Rural"]


def test_reshape_accepts_column_variants_and_label_spelling() -> None:
    wide = pd.DataFrame(
        {
            "category": ["overall"],
            "Population Size": ["small/medium metro"],
            "2020": ["5.0"],
        }
    )
    out = reshape_wide(wide)
    assert out["Pop_Size"].tolist() == ["Small/Medium Metro"]


def test_reshape_missing_columns_raise_key_error() -> None:
    with pytest.raises(KeyError):
        reshape_wide(pd.DataFrame({"Category": ["Rural"], "2020": ["1"]}))

    wide = pd.DataFrame({"Category": ["Rural"], "Pop_Size": ["Rural"], "2020": ["1"]})
    with pytest.raises(KeyError):
        reshape_wide(wide, year_columns=["2020", "2021"])


def test_reshape_parse_error_has_context() -> None:
    wide = pd.DataFrame(
        {
            "Category": ["Rural", "Rural"],
            "Pop_Size": ["Rural", "Rural"],
            "2020": ["1", "not a number"],
        }
    )
    with pytest.raises(ParseError) as exc:
        reshape_wide(wide)
    assert exc.value.column == "2020"
    assert exc.value.row == 1


def test_reshape_everything_filtered_returns_empty_table() -> None:
    wide = pd.DataFrame({"Category": ["Sex"], "Pop_Size": ["Overall"], "2020": ["1"]})
    out = reshape_wide(wide)
    assert out.empty
    assert list(out.columns) == list(TABLE_COLUMNS)


def test_canonical_pop_size_strict_lookup() -> None:
    assert canonical_pop_size("large_metro") == "Large Metro"
    assert canonical_pop_size("Suburban") is None
    with pytest.raises(UnknownCategoryError):
        canonical_pop_size("Suburban", strict=True)
