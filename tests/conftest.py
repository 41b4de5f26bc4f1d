"""tests/conftest.py"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
import pytest


class _Obj:
    """Simple attribute container (duck-typed config sections)."""

    def __init__(self, **kwargs: Any) -> None:
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __repr__(self) -> str:
        return f"_Obj({vars(self)!r})"


@dataclass
class MinimalAppConfig:
    """
    Duck-typed stand-in for mortforecast.common.config.AppConfig.
    Only includes what pipelines use.
    """
    project_root: Path
    paths: _Obj
    input: _Obj
    categories: _Obj
    forecast: _Obj


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    # Emulate repository root in temp dir
    (tmp_path / "data" / "raw").mkdir(parents=True, exist_ok=True)
    (tmp_path / "artifacts" / "forecasts").mkdir(parents=True, exist_ok=True)
    return tmp_path


def make_minimal_config(project_root: Path) -> MinimalAppConfig:
    paths = _Obj(
        raw_dir="data/raw",
        processed_dir="data/processed",
        forecasts_dir="artifacts/forecasts",
        reports_dir="artifacts/reports",
    )
    input_ = _Obj(file="data/raw/mortality_rates.csv", sheet_name=None, year_columns=None)
    categories = _Obj(allowed=["overall", "Large Metro", "Small/Medium Metro", "Rural"])
    forecast = _Obj(
        start_year=2023,
        end_year=2025,
        models=["linear", "smooth"],
        n_jobs=1,
        export_report_pack=False,
        smooth=_Obj(max_basis=10),
    )
    return MinimalAppConfig(
        project_root=project_root,
        paths=paths,
        input=input_,
        categories=categories,
        forecast=forecast,
    )


@pytest.fixture
def cfg(project_root: Path) -> MinimalAppConfig:
    return make_minimal_config(project_root)


def make_wide_table() -> pd.DataFrame:
    """
    Wide mortality table shaped like the source export:
      - one row per Category / Pop_Size
      - one string column per year, some with a CI annotation
      - a category outside the allowed set ("Sex")
    """
    years = [str(y) for y in range(2015, 2023)]
    rows = {
        ("overall", "Overall"): [730.0, 728.5, 731.0, 723.6, 715.2, 828.7, 879.7, 798.8],
        ("Large Metro", "Large Metro"): [690.0, 688.0, 689.5, 681.0, 672.3, 790.1, 822.4, 751.0],
        ("Small/Medium Metro", "Small/Medium Metro"): [760.2, 759.0, 761.8, 755.0, 747.9, 845.3, 910.6, 833.2],
        ("Rural", "Rural"): [830.5, 833.0, 836.2, 830.1, 823.0, 934.8, 1007.7, 924.5],
        ("Sex", "Overall"): [600.0] * len(years),
    }
    records = []
    for (category, pop_size), values in rows.items():
        rec: dict[str, Any] = {"Category": category, "Pop_Size": pop_size}
        for y, v in zip(years, values):
            rec[y] = f"{v} ({v - 5.0:.1f}-{v + 5.0:.1f})" if y in {"2020", "2021"} else str(v)
        records.append(rec)
    return pd.DataFrame(records)


@pytest.fixture
def wide_table() -> pd.DataFrame:
    return make_wide_table()


@pytest.fixture
def minimal_data(cfg: MinimalAppConfig) -> MinimalAppConfig:
    make_wide_table().to_csv(cfg.project_root / "data" / "raw" / "mortality_rates.csv", index=False)
    return cfg
