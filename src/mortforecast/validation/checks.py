"""src/mortforecast/validation/checks.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from mortforecast.validation.schemas import (
    ACTUAL,
    MORTALITY_COMBINED,
    MORTALITY_LONG,
    POP_SIZES,
    RECORD_TYPES,
    SchemaSpec,
    assert_schema,
)

# one record per group, record type and year
SERIES_KEY: tuple[str, ...] = ("Pop_Size", "Type", "Year")


@dataclass(frozen=True)
class CheckResult:
    ok: bool
    errors: tuple[str, ...]

    def raise_if_failed(self) -> None:
        if not self.ok:
            msg = "\n".join(self.errors) if self.errors else "Validation failed."
            raise ValueError(msg)


def check_integer_years(df: pd.DataFrame, col: str = "Year") -> list[str]:
    """Years must be present and whole numbers."""
    if col not in df.columns:
        return []
    y = pd.to_numeric(df[col], errors="coerce")
    n_bad = int((y.isna() | (y % 1 != 0)).sum())
    return [f"{col}: {n_bad} rows with missing or non-integer year"] if n_bad else []


def check_rates(df: pd.DataFrame, col: str = "Value", *, allow_negative: bool = False) -> list[str]:
    """
    Rates must be finite. Observed rates must also be >= 0; predicted ones may
    extrapolate below zero and are left as they are.
    """
    if col not in df.columns:
        return []
    x = pd.to_numeric(df[col], errors="coerce").to_numpy(dtype=float)
    finite = np.isfinite(x)
    errs: list[str] = []
    if not finite.all():
        errs.append(f"{col}: {int((~finite).sum())} missing or non-finite values found")
    if not allow_negative:
        n_neg = int((x[finite] < 0).sum())
        if n_neg:
            errs.append(f"{col}: {n_neg} negative values found")
    return errs


def check_labels(df: pd.DataFrame, allowed: Mapping[str, Iterable[str]]) -> list[str]:
    errs: list[str] = []
    for c, values in allowed.items():
        if c not in df.columns:
            continue
        ok = set(values)
        bad = ~df[c].isin(ok)
        if bad.any():
            sample = df.loc[bad, c].dropna().unique()[:10].tolist()
            errs.append(f"{c}: {int(bad.sum())} values outside {sorted(ok)}; sample={sample}")
    return errs


def check_one_record_per_year(df: pd.DataFrame, keys: Sequence[str] = SERIES_KEY) -> list[str]:
    if any(k not in df.columns for k in keys):
        return []
    dup = df.duplicated(subset=list(keys), keep=False)
    if not dup.any():
        return []
    sample = df.loc[dup, list(keys)].head(10).to_dict(orient="records")
    return [f"duplicate keys on {list(keys)}; dup_rows={int(dup.sum())}; sample={sample}"]


def validate_df(
    df: pd.DataFrame,
    *,
    schema: SchemaSpec | None = None,
    year_col: str | None = None,
    value_col: str | None = None,
    allow_negative: bool = False,
    allowed_values: Mapping[str, Iterable[str]] | None = None,
    unique_keys: Sequence[str] = (),
) -> CheckResult:
    """
    Run the table checks and collect every failure message.
    A missing required column stops the run early.
    """
    if schema is not None:
        try:
            assert_schema(df, schema)
        except KeyError as e:
            return CheckResult(ok=False, errors=(str(e),))

    errors: list[str] = []
    if year_col:
        errors.extend(check_integer_years(df, year_col))
    if value_col:
        errors.extend(check_rates(df, value_col, allow_negative=allow_negative))
    if allowed_values:
        errors.extend(check_labels(df, allowed_values))
    if unique_keys:
        errors.extend(check_one_record_per_year(df, unique_keys))

    return CheckResult(ok=not errors, errors=tuple(errors))


def validate_mortality_long(df: pd.DataFrame) -> CheckResult:
    """Actual records straight out of the reshaper."""
    return validate_df(
        df,
        schema=MORTALITY_LONG,
        year_col="Year",
        value_col="Value",
        allowed_values={"Pop_Size": POP_SIZES, "Type": (ACTUAL,)},
        unique_keys=SERIES_KEY,
    )


def validate_mortality_combined(df: pd.DataFrame) -> CheckResult:
    """Actual + Predicted table handed to reporting."""
    return validate_df(
        df,
        schema=MORTALITY_COMBINED,
        year_col="Year",
        value_col="Value",
        allow_negative=True,
        allowed_values={"Pop_Size": POP_SIZES, "Type": RECORD_TYPES},
        unique_keys=SERIES_KEY,
    )
