"""src/mortforecast/validation/schemas.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

import pandas as pd


PopSize = Literal["Overall", "Large Metro", "Small/Medium Metro", "Rural"]
RecordType = Literal["Actual", "Predicted"]

POP_SIZES: tuple[str, ...] = ("Overall", "Large Metro", "Small/Medium Metro", "Rural")
ACTUAL = "Actual"
PREDICTED = "Predicted"
RECORD_TYPES: tuple[str, ...] = (ACTUAL, PREDICTED)

TABLE_COLUMNS: tuple[str, ...] = ("Category", "Pop_Size", "Year", "Value", "Type")


@dataclass(frozen=True)
class SchemaSpec:
    """Required columns and dtype hints for a DataFrame."""
    name: str
    required_cols: tuple[str, ...]
    dtype_hints: dict[str, str] | None = None  # e.g. {"Year": "int", "Pop_Size": "string"}


def _missing_cols(df: pd.DataFrame, required: Iterable[str]) -> list[str]:
    req = list(required)
    return [c for c in req if c not in df.columns]


_TABLE_DTYPES = {"Category": "string", "Pop_Size": "string", "Year": "int", "Value": "float", "Type": "string"}

MORTALITY_WIDE = SchemaSpec(
    name="mortality_wide",
    required_cols=("Category", "Pop_Size"),
    dtype_hints={"Category": "string", "Pop_Size": "string"},
)

MORTALITY_LONG = SchemaSpec(
    name="mortality_long",
    required_cols=TABLE_COLUMNS,
    dtype_hints=_TABLE_DTYPES,
)

MORTALITY_COMBINED = SchemaSpec(
    name="mortality_combined",
    required_cols=TABLE_COLUMNS,
    dtype_hints=_TABLE_DTYPES,
)


def assert_schema(df: pd.DataFrame, spec: SchemaSpec) -> None:
    """Raise a KeyError if required columns are missing."""
    missing = _missing_cols(df, spec.required_cols)
    if missing:
        raise KeyError(
            f"{spec.name}: missing columns {missing}. Found: {list(df.columns)}"
        )


def empty_table() -> pd.DataFrame:
    """Zero-row table with the canonical columns and dtypes."""
    return pd.DataFrame(
        {
            "Category": pd.Series(dtype="object"),
            "Pop_Size": pd.Series(dtype="object"),
            "Year": pd.Series(dtype="int64"),
            "Value": pd.Series(dtype="float64"),
            "Type": pd.Series(dtype="object"),
        }
    )
