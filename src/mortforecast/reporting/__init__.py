"""src/mortforecast/reporting/__init__.py"""

from __future__ import annotations

from .export import ReportPackPaths, export_report_pack
from .plots import (
    POP_SIZE_COLORS,
    plot_mortality_forecast,
    plot_mortality_history,
    plot_mortality_series,
)
from .tables import make_forecast_summary_table

__all__ = [
    "ReportPackPaths",
    "export_report_pack",
    "POP_SIZE_COLORS",
    "plot_mortality_series",
    "plot_mortality_history",
    "plot_mortality_forecast",
    "make_forecast_summary_table",
]
