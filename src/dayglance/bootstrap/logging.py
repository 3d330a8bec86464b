from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from platformdirs import user_log_dir

APP_NAME = "dayglance"
LOG_LEVEL = os.getenv("DAYGLANCE_LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("DAYGLANCE_LOG_FILE", "").lower() in ("1", "true", "yes")
LOG_DIR = Path(os.getenv("DAYGLANCE_LOG_DIR") or user_log_dir(APP_NAME, appauthor=False))

_INITIALIZED = False


def configure_logging(*, level: Optional[str] = None, log_to_file: Optional[bool] = None) -> None:
    """Configure process-wide logging once: console always, rotating file on request."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    resolved_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if LOG_TO_FILE if log_to_file is None else log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(str(LOG_DIR / "dayglance.log"), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        )

    root = logging.getLogger()
    root.setLevel(resolved_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(resolved_level))
