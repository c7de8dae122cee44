"""Centralized logging configuration for Steam Card.

Every module logs through a child of the ``steamcard`` logger
(``steamcard.cache``, ``steamcard.web``, ...). ``setup_logging`` attaches a
console handler (and optionally a file handler) to that root once and routes
the Werkzeug request log through the same format. Chatty third-party
loggers are held at WARNING unless DEBUG is requested.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["LOG_FORMAT", "logger", "resolve_level", "setup_logging"]

logger = logging.getLogger("steamcard")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Loggers that flood the console at INFO/DEBUG
_NOISY_LOGGERS = ("urllib3", "PIL")


def resolve_level(level: int | str) -> int:
    """Turns a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> None:
    """Configure the application logger tree.

    Calling this again only updates the level; handlers are attached once.

    Args:
        level: Numeric level or level name (default: INFO).
        log_file: Optional file that receives DEBUG and above.
    """
    numeric = resolve_level(level)
    logger.setLevel(numeric)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(numeric if numeric <= logging.DEBUG else logging.WARNING)

    if logger.handlers:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(numeric)
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(numeric)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # The development server logs each request on "werkzeug"
    werkzeug = logging.getLogger("werkzeug")
    werkzeug.setLevel(numeric)
    if not werkzeug.handlers:
        werkzeug.addHandler(console)
