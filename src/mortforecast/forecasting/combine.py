"""src/mortforecast/forecasting/combine.py"""

from __future__ import annotations

import pandas as pd

from mortforecast.validation.schemas import ACTUAL, MORTALITY_LONG, PREDICTED, TABLE_COLUMNS, assert_schema, empty_table


_TYPE_RANK = {ACTUAL: 0, PREDICTED: 1}


def combine_series(actual: pd.DataFrame, predicted: pd.DataFrame) -> pd.DataFrame:
    """
    Merge Actual and Predicted records into one table ordered by
    Pop_Size, Year, then Actual before Predicted.

    Output has exactly len(actual) + len(predicted) rows; field values are
    copied unchanged.
    """
    assert_schema(actual, MORTALITY_LONG)
    assert_schema(predicted, MORTALITY_LONG)

    if (actual["Type"] != ACTUAL).any():
        raise ValueError("actual table contains non-Actual records")
    if (predicted["Type"] != PREDICTED).any():
        raise ValueError("predicted table contains non-Predicted records")

    parts = [df[list(TABLE_COLUMNS)] for df in (actual, predicted) if not df.empty]
    if not parts:
        return empty_table()

    out = pd.concat(parts, ignore_index=True)
    order = (
        out.assign(_type_rank=out["Type"].map(_TYPE_RANK))
        .sort_values(["Pop_Size", "Year", "_type_rank"], kind="mergesort")
        .index
    )
    return out.loc[order].reset_index(drop=True)
