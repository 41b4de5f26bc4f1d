"""src/mortforecast/reporting/plots.py"""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from mortforecast.validation.schemas import ACTUAL, POP_SIZES, PREDICTED


POP_SIZE_COLORS: dict[str, str] = {
    "Overall": "tab:gray",
    "Large Metro": "tab:blue",
    "Small/Medium Metro": "tab:orange",
    "Rural": "tab:green",
}

_LINESTYLES = {ACTUAL: "-", PREDICTED: ":"}


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    d = df.copy()
    d["Pop_Size"] = d["Pop_Size"].astype(str).str.strip()
    d["Type"] = d["Type"].astype(str).str.strip()
    d["Year"] = pd.to_numeric(d["Year"], errors="coerce")
    d["Value"] = pd.to_numeric(d["Value"], errors="coerce")
    d = d.dropna(subset=["Pop_Size", "Year", "Value"]).copy()
    d["Year"] = d["Year"].astype(int)
    return d


def plot_mortality_series(
    table: pd.DataFrame,
    *,
    out_path: Path,
    title: str = "Age-adjusted mortality rate by population size",
) -> Path | None:
    """
    Saves one PNG with a line per Pop_Size and Type:
      - colour by Pop_Size
      - solid for Actual, dotted for Predicted

    Expected columns:
      Pop_Size, Year, Value, Type
    """
    d = _prepare(table)
    if d.empty:
        return None

    out_path = Path(out_path)
    _ensure_dir(out_path.parent)

    plt.figure(figsize=(9, 5))
    for ps in POP_SIZES:
        sub = d[d["Pop_Size"] == ps]
        if sub.empty:
            continue
        for rtype in (ACTUAL, PREDICTED):
            s = sub[sub["Type"] == rtype].sort_values("Year")
            if s.empty:
                continue
            plt.plot(
                s["Year"].to_numpy(),
                s["Value"].to_numpy(),
                color=POP_SIZE_COLORS[ps],
                linestyle=_LINESTYLES[rtype],
                label=f"{ps} ({rtype.lower()})",
            )

    plt.title(title)
    plt.xlabel("Year")
    plt.ylabel("Deaths per 100,000")
    plt.legend(fontsize="small")
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close()
    return out_path


def plot_mortality_history(actual: pd.DataFrame, *, out_path: Path) -> Path | None:
    """Historical series only."""
    d = actual[actual["Type"] == ACTUAL]
    return plot_mortality_series(d, out_path=out_path, title="Age-adjusted mortality rate (historical)")


def plot_mortality_forecast(combined: pd.DataFrame, *, out_path: Path, model: str) -> Path | None:
    """Actual + Predicted series for one model."""
    return plot_mortality_series(
        combined,
        out_path=out_path,
        title=f"Age-adjusted mortality rate: actual and {model} forecast",
    )
