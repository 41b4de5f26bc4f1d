"""src/mortforecast/pipelines/run_forecast.py"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from mortforecast.common.utils import get_option, resolve_path, safe_int
from mortforecast.forecasting.combine import combine_series
from mortforecast.forecasting.predict_mortality import (
    MODEL_KINDS,
    ForecastResult,
    fit_and_predict,
    horizon_years,
)
from mortforecast.io.readers import read_mortality_wide
from mortforecast.io.writers import write_csv, write_forecast_artifact
from mortforecast.modeling.smooth import DEFAULT_MAX_BASIS
from mortforecast.preprocessing.reshape import DEFAULT_ALLOWED_CATEGORIES, reshape_wide
from mortforecast.validation.checks import validate_mortality_combined, validate_mortality_long

logger = logging.getLogger(__name__)


def _models_from_config(fcfg: Any) -> list[str]:
    raw = get_option(fcfg, "models", ["linear", "smooth"])
    if isinstance(raw, str):
        raw = [raw]
    models = [str(m).strip().lower() for m in raw]
    unknown = [m for m in models if m not in MODEL_KINDS]
    if unknown:
        raise ValueError(f"Unknown forecast model(s) {unknown}. Expected any of {list(MODEL_KINDS)}")
    if not models:
        raise ValueError("forecast.models is empty")
    return models


def _fit_kwargs(fcfg: Any, model: str) -> dict[str, Any]:
    if model != "smooth":
        return {}
    scfg = get_option(fcfg, "smooth", {})
    return {"max_basis": safe_int(get_option(scfg, "max_basis", DEFAULT_MAX_BASIS), DEFAULT_MAX_BASIS)}


def run_reshape(cfg: Any) -> pd.DataFrame:
    """
    Read the wide mortality table, reshape it to Actual records and write
    processed_dir/mortality_long.csv.
    """
    icfg = get_option(cfg, "input", {})
    ccfg = get_option(cfg, "categories", {})
    pcfg = get_option(cfg, "paths", {})

    input_file = get_option(icfg, "file", "data/raw/mortality_rates.csv")
    in_path = resolve_path(cfg.project_root, input_file)
    wide = read_mortality_wide(in_path, sheet_name=get_option(icfg, "sheet_name", None))
    logger.info("Read %d wide row(s) from %s", len(wide), in_path)

    allowed = get_option(ccfg, "allowed", sorted(DEFAULT_ALLOWED_CATEGORIES))
    year_columns = get_option(icfg, "year_columns", None)
    if year_columns is not None:
        year_columns = [str(c) for c in year_columns]

    actual = reshape_wide(wide, year_columns=year_columns, allowed_categories=allowed)
    validate_mortality_long(actual).raise_if_failed()

    processed_dir = resolve_path(cfg.project_root, get_option(pcfg, "processed_dir", "data/processed"))
    out = write_forecast_artifact(actual, processed_dir / "mortality_long.csv")
    logger.info("Wrote %d actual record(s): %s", len(actual), out)
    return actual


def run_forecast(cfg: Any) -> dict[str, ForecastResult]:
    """
    Run the forecast pipeline:
      1) wide table -> Actual records
      2) per-model fit + predict over the configured horizon
      3) combined Actual + Predicted table per model
      4) optional report pack (summary tables + charts)
    """
    fcfg = get_option(cfg, "forecast", {})
    pcfg = get_option(cfg, "paths", {})

    start_year = safe_int(get_option(fcfg, "start_year", 2023), 2023)
    end_year = safe_int(get_option(fcfg, "end_year", 2028), 2028)
    if end_year < start_year:
        raise ValueError("forecast.end_year must be >= forecast.start_year")
    years = horizon_years(start_year, end_year)

    models = _models_from_config(fcfg)
    n_jobs = safe_int(get_option(fcfg, "n_jobs", 1), 1)

    forecasts_dir = resolve_path(cfg.project_root, get_option(pcfg, "forecasts_dir", "artifacts/forecasts"))
    forecasts_dir.mkdir(parents=True, exist_ok=True)

    actual = run_reshape(cfg)

    results: dict[str, ForecastResult] = {}
    combined_by_model: dict[str, pd.DataFrame] = {}
    for model in models:
        result = fit_and_predict(actual, years, model=model, n_jobs=n_jobs, **_fit_kwargs(fcfg, model))
        results[model] = result

        combined = combine_series(actual, result.predicted)
        validate_mortality_combined(combined).raise_if_failed()
        combined_by_model[model] = combined

        out_csv = forecasts_dir / f"mortality_{model}_{start_year}_{end_year}.csv"
        write_forecast_artifact(combined, out_csv)
        logger.info("Wrote %s forecast: %s", model, out_csv)

        if not result.ok:
            fail_csv = write_csv(result.failures_frame(), forecasts_dir / f"forecast_failures_{model}.csv")
            logger.warning("Wrote %s failure report: %s", model, fail_csv)

    if bool(get_option(fcfg, "export_report_pack", True)):
        # imported lazily so matplotlib is only loaded when charts are requested
        from mortforecast.reporting.export import export_report_pack

        reports_dir = resolve_path(cfg.project_root, get_option(pcfg, "reports_dir", "artifacts/reports"))
        pack = export_report_pack(actual=actual, combined_by_model=combined_by_model, out_dir=Path(reports_dir))
        logger.info("Report pack written: %s", pack.out_dir)

    return results
