# messenger_shell/core/logger.py

"""
Logging helper for the shell.

- Logs to file (per-user log directory) and console
- Used by controller, state store, navigation guard, etc.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "messenger_shell"
LOG_FILE_NAME = "messenger_shell.log"


def default_log_dir() -> Path:
    return Path(user_log_dir("messenger-shell", appauthor=False))


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the shell logger, or a child logger for one component."""
    if not component:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{component}")



def _file_handler(logger: logging.Logger) -> logging.FileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler
    return None


def setup_logging(log_dir: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the shell logger. Calling it again with another directory moves
    the file handler there; calling it with the same directory is a no-op.
    """
    if log_dir is None:
        log_dir = default_log_dir()
    log_file = log_dir / LOG_FILE_NAME

    logger = get_logger()
    logger.setLevel(level)

    current = _file_handler(logger)
    # Avoid duplicate handlers if called twice
    if current is not None and current.baseFilename == os.path.abspath(log_file):
        return logger

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        ch.setLevel(level)
        logger.addHandler(ch)

    # File handler (skipped when the log directory is not writable)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        logger.warning(f"Log directory {log_dir} not writable; keeping previous log output.")
        return logger

    fh.setFormatter(fmt)
    fh.setLevel(level)
    if current is not None:
        logger.removeHandler(current)
        current.close()
    logger.addHandler(fh)

    logger.info(f"Shell logging initialized ({log_file}).")
    return logger
