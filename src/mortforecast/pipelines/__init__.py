"""src/mortforecast/pipelines/__init__.py"""

from .run_forecast import run_forecast, run_reshape

__all__ = [
    "run_forecast",
    "run_reshape",
]
