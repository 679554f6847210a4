# web_scout/logger.py
"""The shared ``WebScout`` logger.

Records go to stderr, since stdout carries command output, and optionally
to a rotating log file. The CLI calls :func:`init_logging` once options are
parsed; library modules just import :data:`logger`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "WebScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``WebScout`` logger and set *level*."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
