"""src/mortforecast/io/writers.py"""

from __future__ import annotations

from pathlib import Path
import pandas as pd

from mortforecast.validation.schemas import TABLE_COLUMNS


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_csv(df: pd.DataFrame, path: Path, *, index: bool = False) -> Path:
    """Write DataFrame to CSV (ensures parent folder exists)."""
    ensure_parent_dir(path)
    df.to_csv(path, index=index)
    return path


def write_forecast_artifact(df: pd.DataFrame, path: Path) -> Path:
    """
    Write a mortality table with light normalization:
    - canonical columns first, in canonical order
    - strip strings
    """
    out = df.copy()
    for c in ("Category", "Pop_Size", "Type"):
        if c in out.columns:
            out[c] = out[c].astype(str).str.strip()

    lead = [c for c in TABLE_COLUMNS if c in out.columns]
    rest = [c for c in out.columns if c not in lead]
    return write_csv(out[lead + rest], path, index=False)
