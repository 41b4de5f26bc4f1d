"""src/mortforecast/common/errors.py"""

from __future__ import annotations

from typing import Any


class ParseError(ValueError):
    """A raw cell could not be turned into a mortality rate."""

    def __init__(
        self,
        message: str,
        *,
        raw: Any = None,
        row: Any = None,
        column: Any = None,
    ) -> None:
        self.raw = raw
        self.row = row
        self.column = column
        if row is not None or column is not None:
            message = f"{message} (row={row!r}, column={column!r})"
        super().__init__(message)


class InsufficientDataError(ValueError):
    """A group has too few distinct years for the requested model."""

    def __init__(self, pop_size: str | None, *, n_years: int, required: int, model: str = "") -> None:
        self.pop_size = pop_size
        self.n_years = int(n_years)
        self.required = int(required)
        self.model = model
        label = f"{model} model" if model else "model"
        super().__init__(
            f"Cannot fit {label} for {pop_size!r}: {self.n_years} distinct year(s), need >= {self.required}"
        )


class UnknownCategoryError(KeyError):
    """Pop-size label outside the known set (raised only on strict lookups)."""
