"""src/mortforecast/reporting/tables.py"""

from __future__ import annotations

import pandas as pd


_SUMMARY_COLUMNS = ["Pop_Size", "Type", "Year_Start", "Year_End", "Value_Min", "Value_Max", "Value_Mean"]


def make_forecast_summary_table(combined: pd.DataFrame) -> pd.DataFrame:
    """
    Input canonical combined table:
        Category, Pop_Size, Year, Value, Type

    Output summary (by Pop_Size + Type):
        Pop_Size, Type, Year_Start, Year_End, Value_Min, Value_Max, Value_Mean
    """
    if combined.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    d = combined.copy()
    d["Year"] = pd.to_numeric(d["Year"], errors="coerce")
    d["Value"] = pd.to_numeric(d["Value"], errors="coerce")
    d = d.dropna(subset=["Pop_Size", "Year", "Value"]).copy()
    d["Year"] = d["Year"].astype(int)

    out = (
        d.groupby(["Pop_Size", "Type"], as_index=False)
        .agg(
            Year_Start=("Year", "min"),
            Year_End=("Year", "max"),
            Value_Min=("Value", "min"),
            Value_Max=("Value", "max"),
            Value_Mean=("Value", "mean"),
        )
        .sort_values(["Pop_Size", "Type"])
        .reset_index(drop=True)
    )
    return out[_SUMMARY_COLUMNS]
