"""src/mortforecast/preprocessing/normalize_values.py"""

from __future__ import annotations

import math
from typing import Any, Hashable

import numpy as np
import pandas as pd

from mortforecast.common.errors import ParseError


def normalize_value(raw: Any) -> float:
    """
    Extract the mortality rate from a raw cell.

    Cells look like "300" or "300 (CI 290-310)"; everything from the first
    "(" onward is discarded and the remainder parsed as a float. Numeric
    cells pass through unchanged.

    Raises ParseError for empty, non-numeric, non-finite or negative values.
    """
    if isinstance(raw, (bool, np.bool_)):
        raise ParseError(f"Boolean cell is not a rate: {raw!r}", raw=raw)

    if isinstance(raw, (int, float, np.integer, np.floating)):
        value = float(raw)
    else:
        if raw is None or raw is pd.NA:
            raise ParseError("Empty cell", raw=raw)
        text = str(raw)
        head = text.split("(", 1)[0].strip()
        if not head:
            raise ParseError(f"No numeric value in {text!r}", raw=raw)
        try:
            value = float(head)
        except ValueError as e:
            raise ParseError(f"Not a number: {head!r}", raw=raw) from e

    if not math.isfinite(value):
        raise ParseError(f"Missing or non-finite value: {raw!r}", raw=raw)
    if value < 0:
        raise ParseError(f"Negative rate: {raw!r}", raw=raw)
    return value


def normalize_series(values: pd.Series, *, column: Hashable | None = None) -> pd.Series:
    """Apply normalize_value to every cell, re-raising with row/column context."""
    out: list[float] = []
    for idx, raw in values.items():
        try:
            out.append(normalize_value(raw))
        except ParseError as e:
            raise ParseError(str(e), raw=raw, row=idx, column=column) from e
    return pd.Series(out, index=values.index, dtype=float, name=values.name)
