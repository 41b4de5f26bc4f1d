"""src/mortforecast/preprocessing/reshape.py"""

from __future__ import annotations

import logging
import re
from typing import Hashable, Iterable, Sequence

import numpy as np
import pandas as pd

from mortforecast.common.errors import UnknownCategoryError
from mortforecast.preprocessing.normalize_values import normalize_series
from mortforecast.validation.schemas import ACTUAL, MORTALITY_WIDE, TABLE_COLUMNS, assert_schema, empty_table

logger = logging.getLogger(__name__)


DEFAULT_ALLOWED_CATEGORIES: frozenset[str] = frozenset({"overall", "Large Metro", "Small/Medium Metro", "Rural"})

# letters-only lowercase key -> canonical label
_POP_SIZE_KEYS: dict[str, str] = {
    "overall": "Overall",
    "largemetro": "Large Metro",
    "smallmediummetro": "Small/Medium Metro",
    "rural": "Rural",
}

_YEAR_LABEL = re.compile(r"^\d{4}$")


def canonical_pop_size(label: object, *, strict: bool = False) -> str | None:
    """
    Map a pop-size label to its canonical form.

    Matching ignores case, spaces and punctuation, so "large metro",
    "LargeMetro" and "Large_Metro" all give "Large Metro". Unknown labels
    return None, or raise UnknownCategoryError when strict=True.
    """
    key = re.sub(r"[^a-z]", "", str(label).lower()) if label is not None else ""
    canon = _POP_SIZE_KEYS.get(key)
    if canon is None and strict:
        raise UnknownCategoryError(f"Unknown pop size: {label!r}")
    return canon


def _year_of(label: Hashable) -> int:
    text = str(label).strip()
    if not _YEAR_LABEL.match(text):
        raise ValueError(f"Column {label!r} is not a year column")
    return int(text)


def detect_year_columns(columns: Iterable[Hashable]) -> list[Hashable]:
    """Column labels that look like four-digit years, in source order."""
    return [c for c in columns if _YEAR_LABEL.match(str(c).strip())]


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    d = df.copy()
    d.columns = [c.strip() if isinstance(c, str) else c for c in d.columns]

    rename_map = {
        "category": "Category",
        "CATEGORY": "Category",
        "pop_size": "Pop_Size",
        "PopSize": "Pop_Size",
        "popsize": "Pop_Size",
        "Pop Size": "Pop_Size",
        "Population Size": "Pop_Size",
        "population_size": "Pop_Size",
    }
    return d.rename(columns={c: rename_map[c] for c in d.columns if c in rename_map})


def reshape_wide(
    wide: pd.DataFrame,
    year_columns: Sequence[Hashable] | None = None,
    allowed_categories: Iterable[str] = DEFAULT_ALLOWED_CATEGORIES,
) -> pd.DataFrame:
    """
    Turn the wide per-year table into Actual records:

        Category, Pop_Size, Year, Value, Type

    Rows whose Category is not in allowed_categories are dropped, as are rows
    with an unknown pop-size label. Every retained row yields exactly one
    record per year column, ordered by source row then year column.
    """
    d = _standardize_columns(wide)
    assert_schema(d, MORTALITY_WIDE)

    years = list(year_columns) if year_columns is not None else detect_year_columns(d.columns)
    if not years:
        raise KeyError(f"No year columns found. Found columns: {list(d.columns)}")
    missing = [c for c in years if c not in d.columns]
    if missing:
        raise KeyError(f"Year columns {missing} not in table. Found: {list(d.columns)}")
    year_values = [_year_of(c) for c in years]
    if len(set(year_values)) != len(year_values):
        raise ValueError(f"Duplicate year columns: {years}")

    allowed = set(allowed_categories)
    d["Category"] = d["Category"].astype(str).str.strip()
    keep = d["Category"].isin(allowed)
    n_dropped = int((~keep).sum())
    if n_dropped:
        logger.info("Dropped %d row(s) outside allowed categories %s", n_dropped, sorted(allowed))
    d = d[keep].copy()

    d["Pop_Size"] = d["Pop_Size"].map(canonical_pop_size)
    unknown = d["Pop_Size"].isna()
    if unknown.any():
        logger.warning("Excluded %d row(s) with unknown pop size", int(unknown.sum()))
        d = d[~unknown].copy()

    if d.empty:
        logger.warning("No rows left after category filtering.")
        return empty_table()

    for col in years:
        d[col] = normalize_series(d[col], column=col)

    d["_row_pos"] = np.arange(len(d))
    long = d.melt(
        id_vars=["_row_pos", "Category", "Pop_Size"],
        value_vars=years,
        var_name="_year_label",
        value_name="Value",
    )
    col_pos = {c: i for i, c in enumerate(years)}
    long["_col_pos"] = long["_year_label"].map(col_pos)
    long["Year"] = long["_year_label"].map(_year_of).astype(int)
    long["Value"] = long["Value"].astype(float)
    long["Type"] = ACTUAL

    long = long.sort_values(["_row_pos", "_col_pos"], kind="mergesort")
    return long[list(TABLE_COLUMNS)].reset_index(drop=True)
