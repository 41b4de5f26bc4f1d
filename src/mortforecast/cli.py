"""src/mortforecast/cli.py"""

from __future__ import annotations

from typing import Optional

import typer
from rich import print

from mortforecast.common.config import load_config
from mortforecast.common.logging import setup_logging
from mortforecast.pipelines.run_forecast import run_forecast, run_reshape

app = typer.Typer(help="Mortality rate forecasting by population size CLI")

DEFAULT_CONFIG = "configs/config.yaml"

ConfigOpt = typer.Option(DEFAULT_CONFIG, help="Path to YAML config")
LogLevelOpt = typer.Option(None, help="Override logging.level (DEBUG, INFO, ...)")


@app.command()
def init(config_path: str = ConfigOpt, log_level: Optional[str] = LogLevelOpt) -> None:
    """Create expected directories from config (data/, artifacts/, etc.)."""
    cfg = load_config(config_path)
    setup_logging(cfg, level=log_level)

    created = cfg.ensure_directories()
    print("[bold green]Init complete.[/bold green]")
    if created:
        print("Created directories:")
        for p in created:
            print(f"  - {p}")
    else:
        print("No directories needed (already exist).")


@app.command()
def reshape(config_path: str = ConfigOpt, log_level: Optional[str] = LogLevelOpt) -> None:
    """Reshape the wide input table into Actual records."""
    cfg = load_config(config_path)
    setup_logging(cfg, level=log_level)
    cfg.ensure_directories()
    actual = run_reshape(cfg)
    print(f"[bold green]Reshape complete.[/bold green] {len(actual)} actual record(s).")


@app.command()
def forecast(config_path: str = ConfigOpt, log_level: Optional[str] = LogLevelOpt) -> None:
    """Fit each configured model per population size and write forecasts."""
    cfg = load_config(config_path)
    setup_logging(cfg, level=log_level)
    cfg.ensure_directories()
    results = run_forecast(cfg)
    for model, result in results.items():
        line = f"  {model}: {len(result.predicted)} predicted record(s)"
        if not result.ok:
            line += f", [yellow]skipped {', '.join(result.failed_groups())}[/yellow]"
        print(line)
    print("[bold green]Forecasting complete.[/bold green]")


if __name__ == "__main__":
    app()
