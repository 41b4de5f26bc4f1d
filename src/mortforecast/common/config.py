"""src/mortforecast/common/config.py"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml


_KNOWN_MODELS = ("linear", "smooth")


def _as_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _check_raw(raw: Dict[str, Any], config_path: Path) -> None:
    """Reject config files whose forecast/categories sections cannot drive a run."""
    problems: list[str] = []

    for section in ("paths", "input", "categories", "forecast", "logging"):
        value = raw.get(section)
        if value is not None and not isinstance(value, dict):
            problems.append(f"{section}: expected a mapping, got {type(value).__name__}")

    fc = raw.get("forecast") or {}
    if isinstance(fc, dict):
        start, end = fc.get("start_year"), fc.get("end_year")
        if start is not None and end is not None:
            try:
                if int(end) < int(start):
                    problems.append(f"forecast: end_year {end} is before start_year {start}")
            except (TypeError, ValueError):
                problems.append(f"forecast: start_year/end_year must be integers, got {start!r}/{end!r}")
        models = fc.get("models")
        if models is not None:
            names = [models] if isinstance(models, str) else list(models)
            unknown = [m for m in names if str(m).strip().lower() not in _KNOWN_MODELS]
            if unknown:
                problems.append(f"forecast.models: unknown {unknown}, expected any of {list(_KNOWN_MODELS)}")

    cats = raw.get("categories") or {}
    if isinstance(cats, dict) and "allowed" in cats:
        allowed = cats["allowed"]
        if not isinstance(allowed, list) or not all(isinstance(c, str) for c in allowed):
            problems.append("categories.allowed: expected a list of strings")

    if problems:
        raise ValueError(f"Invalid config {config_path}:\n  " + "\n  ".join(problems))


@dataclass(frozen=True)
class AppConfig:
    """Config wrapper with project-root relative paths."""

    raw: Dict[str, Any]
    config_path: Path

    @property
    def project_root(self) -> Path:
        # configs/config.yaml -> project root is parent of "configs"
        return self.config_path.parent.parent.resolve()

    @property
    def paths(self) -> Dict[str, Path]:
        p = self.raw.get("paths") or {}
        return {k: (self.project_root / Path(v)).resolve() for k, v in p.items()}

    @property
    def logging(self) -> Dict[str, Any]:
        return self.raw.get("logging") or {}

    @property
    def input(self) -> Dict[str, Any]:
        return self.raw.get("input") or {}

    @property
    def categories(self) -> Dict[str, Any]:
        return self.raw.get("categories") or {}

    @property
    def forecast(self) -> Dict[str, Any]:
        return self.raw.get("forecast") or {}

    def ensure_directories(self) -> List[str]:
        created: List[str] = []
        for _, path in self.paths.items():
            if path.suffix:  # treat as file path
                path.parent.mkdir(parents=True, exist_ok=True)
                continue
            if not path.exists():
                path.mkdir(parents=True, exist_ok=True)
                created.append(str(path))
        return created


def load_config(config_path: str | Path) -> AppConfig:
    config_path = _as_path(config_path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Missing config file:\n{config_path}")
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config {config_path}: top level must be a mapping")
    _check_raw(raw, config_path)
    return AppConfig(raw=raw, config_path=config_path)
