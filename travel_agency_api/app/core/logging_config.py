"""
Logging configuration for the application.

``setup_logging`` attaches handlers to the ``travel_agency_api`` logger
rather than to the root logger, so uvicorn keeps control of its own
access and error logs.  Every module logs through
``logging.getLogger(__name__)`` and therefore ends up here.
"""

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "travel_agency_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure and return the package logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file to append log records to, in addition to the
        console.  Resolved relative to the current working directory.

    Handlers are only attached on the first call.  Later calls, for
    example from ``create_app`` in tests, just update the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
