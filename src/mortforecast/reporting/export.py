"""src/mortforecast/reporting/export.py"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import pandas as pd

from mortforecast.reporting.plots import plot_mortality_forecast, plot_mortality_history
from mortforecast.reporting.tables import make_forecast_summary_table
from mortforecast.validation.checks import validate_mortality_combined, validate_mortality_long


@dataclass(frozen=True)
class ReportPackPaths:
    out_dir: Path
    tables_dir: Path
    figures_dir: Path

    history_png: Path | None = None
    forecast_pngs: dict[str, Path] = field(default_factory=dict)
    summary_csvs: dict[str, Path] = field(default_factory=dict)


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def export_report_pack(
    *,
    actual: pd.DataFrame,
    combined_by_model: Mapping[str, pd.DataFrame],
    out_dir: Path,
) -> ReportPackPaths:
    """
    Build a reporting "pack":
        - one summary CSV per model
        - a historical chart plus one actual-vs-forecast chart per model

    This module does NOT do forecasting. It consumes canonical outputs from pipelines.
    """
    out_dir = Path(out_dir)
    tables_dir = out_dir / "tables"
    figures_dir = out_dir / "figures"
    _ensure_dir(tables_dir)
    _ensure_dir(figures_dir)

    # Validate inputs (fail early)
    validate_mortality_long(actual).raise_if_failed()
    for combined in combined_by_model.values():
        validate_mortality_combined(combined).raise_if_failed()

    history_png = plot_mortality_history(actual, out_path=figures_dir / "mortality_history.png")

    forecast_pngs: dict[str, Path] = {}
    summary_csvs: dict[str, Path] = {}
    for model, combined in combined_by_model.items():
        summary = make_forecast_summary_table(combined)
        summary_csv = tables_dir / f"forecast_summary_{model}.csv"
        summary.to_csv(summary_csv, index=False)
        summary_csvs[model] = summary_csv

        png = plot_mortality_forecast(combined, out_path=figures_dir / f"mortality_forecast_{model}.png", model=model)
        if png is not None:
            forecast_pngs[model] = png

    return ReportPackPaths(
        out_dir=out_dir,
        tables_dir=tables_dir,
        figures_dir=figures_dir,
        history_png=history_png,
        forecast_pngs=forecast_pngs,
        summary_csvs=summary_csvs,
    )
