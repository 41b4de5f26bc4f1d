"""src/mortforecast/io/__init__.py"""
from .readers import read_mortality_wide
from .writers import ensure_parent_dir, write_csv, write_forecast_artifact

__all__ = [
    "read_mortality_wide",
    "ensure_parent_dir",
    "write_csv",
    "write_forecast_artifact",
]
