"""src/mortforecast/preprocessing/__init__.py"""

from .normalize_values import normalize_series, normalize_value
from .reshape import DEFAULT_ALLOWED_CATEGORIES, canonical_pop_size, detect_year_columns, reshape_wide

__all__ = [
    "normalize_value",
    "normalize_series",
    "DEFAULT_ALLOWED_CATEGORIES",
    "canonical_pop_size",
    "detect_year_columns",
    "reshape_wide",
]
