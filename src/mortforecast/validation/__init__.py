"""src/mortforecast/validation/__init__.py"""

from __future__ import annotations

from .checks import (
    CheckResult,
    validate_df,
    validate_mortality_combined,
    validate_mortality_long,
)
from .schemas import (
    ACTUAL,
    MORTALITY_COMBINED,
    MORTALITY_LONG,
    MORTALITY_WIDE,
    POP_SIZES,
    PREDICTED,
    RECORD_TYPES,
    TABLE_COLUMNS,
    SchemaSpec,
    assert_schema,
    empty_table,
)

__all__ = [
    # checks
    "CheckResult",
    "validate_df",
    "validate_mortality_long",
    "validate_mortality_combined",
    # schemas
    "SchemaSpec",
    "assert_schema",
    "empty_table",
    "MORTALITY_WIDE",
    "MORTALITY_LONG",
    "MORTALITY_COMBINED",
    "TABLE_COLUMNS",
    "POP_SIZES",
    "RECORD_TYPES",
    "ACTUAL",
    "PREDICTED",
]
