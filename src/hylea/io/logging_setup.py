"""File logging for hylea.

// [LAW:single-enforcer] The only module that attaches handlers to the "hylea" logger.

The UI owns the terminal for the whole run, so records never go to stderr.
Environment:
    HYLEA_LOG_FILE   explicit log file
    HYLEA_LOG_DIR    directory for a per-run file (default ~/.local/share/hylea/logs)
    HYLEA_LOG_LEVEL  level name (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "hylea"
DEFAULT_LOG_DIR = "~/.local/share/hylea/logs"
MAX_LOG_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 2
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(threadName)s %(name)s: %(message)s"


@dataclass(frozen=True)
class LoggingRuntime:
    level: int
    file_path: str

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


_RUNTIME: LoggingRuntime | None = None


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get("HYLEA_LOG_LEVEL", "INFO").strip().upper())
    # getLevelName answers "Level X" for names it does not know.
    return level if isinstance(level, int) else logging.INFO


def _log_path() -> Path:
    explicit = os.environ.get("HYLEA_LOG_FILE")
    if explicit:
        return Path(explicit)
    log_dir = Path(os.environ.get("HYLEA_LOG_DIR") or DEFAULT_LOG_DIR).expanduser()
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return log_dir / f"hylea-{stamp}-{os.getpid()}.log"


def configure() -> LoggingRuntime:
    """Attach a rotating file handler to the "hylea" logger once per process."""
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level = _level_from_env()
    path = _log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(handler)

    _RUNTIME = LoggingRuntime(level=level, file_path=str(path))
    return _RUNTIME


def reset() -> None:
    """Close the file handler and allow configure() to run again."""
    global _RUNTIME
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _RUNTIME = None
