"""File-based logging setup.

The terminal belongs to the UI while the app runs, so log records go to a file
in the platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_LEVEL_ENV_VAR = "LAZYDB_LOG_LEVEL"
LOG_FILENAME = f"{APP_NAME}.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_HANDLER_NAME = "lazydb-file"


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (argument, then env var, then ``INFO``) to ``logging`` level."""
    name = level or os.environ.get(LOG_LEVEL_ENV_VAR, "") or "INFO"
    value = logging.getLevelName(name.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {name!r}")
    return value


def configure_logging(level: str | None = None, log_path: Path | None = None) -> Path:
    """Attach one file handler to the ``lazydb`` logger and return its path.

    Calling it again replaces the previous handler rather than stacking them.
    """
    resolved_level = resolve_log_level(level)
    path = DEFAULT_LOG_PATH if log_path is None else Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(APP_NAME)
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolved_level)
    root.propagate = False
    return path


__all__ = ["DEFAULT_LOG_PATH", "LOG_LEVEL_ENV_VAR", "configure_logging", "resolve_log_level"]
