"""src/mortforecast/common/logging.py"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mortforecast.common.config import AppConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(cfg: AppConfig, *, level: str | None = None) -> Path | None:
    """
    Console logging plus an optional rotating log file (logging.file).

    `level` overrides logging.level from the config. Python warnings
    (statsmodels / sklearn fit warnings) are routed into the same handlers.
    Returns the log file path, if any.
    """
    level_str = str(level or cfg.logging.get("level", "INFO")).upper()
    lvl = getattr(logging, level_str, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    lf: Path | None = None
    log_file = cfg.logging.get("file")
    if log_file:
        lf = (cfg.project_root / Path(log_file)).resolve()
        lf.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(lf, maxBytes=2_000_000, backupCount=3, encoding="utf-8"))

    for h in handlers:
        h.setLevel(lvl)

    logging.basicConfig(level=lvl, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.captureWarnings(True)

    for noisy in ("matplotlib", "PIL", "joblib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return lf
