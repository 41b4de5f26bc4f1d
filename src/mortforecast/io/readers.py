"""src/mortforecast/io/readers.py"""

from __future__ import annotations

from pathlib import Path

import pandas as pd


def read_mortality_wide(path: Path, *, sheet_name: str | int | None = None) -> pd.DataFrame:
    """
    Load the wide mortality table (one column per year) as strings.

    Supports .csv and .xlsx/.xls. Cells stay unparsed ("300 (CI 290-310)")
    so the normalizer sees exactly what the source holds. Empty cells
    come through as NaN.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing file:\n{path}")

    suffix = path.suffix.lower()
    if suffix in {".xlsx", ".xlsm", ".xls"}:
        df = pd.read_excel(path, sheet_name=0 if sheet_name is None else sheet_name, dtype=str)
    elif suffix in {".csv", ".txt"}:
        df = pd.read_csv(path, dtype=str)
    else:
        raise ValueError(f"Unsupported input format {suffix!r} for {path}")

    df.columns = [str(c).strip() for c in df.columns]
    # spreadsheet exports sometimes carry fully empty trailing rows
    return df.dropna(how="all").reset_index(drop=True)
