"""
src/mortforecast/common/utils.py

mortforecast.common.utils

Small helpers shared by the pipelines and the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


def safe_int(value: Any, default: int) -> int:
    """Best-effort int conversion with fallback."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_option(cfg_obj: Any, key: str, default: Any = None) -> Any:
    """Support both dict-style and attribute-style config sections."""
    if cfg_obj is None:
        return default
    if isinstance(cfg_obj, dict):
        v = cfg_obj.get(key, default)
        return default if v is None else v
    if hasattr(cfg_obj, key):
        v = getattr(cfg_obj, key)
        return default if v is None else v
    return default


def resolve_path(project_root: Path, maybe_path: str | Path) -> Path:
    """Resolve relative paths against the project root."""
    p = Path(maybe_path)
    return p if p.is_absolute() else (Path(project_root) / p).resolve()
