"""
Observability

Logging setup for applications and tools embedding the semantic logger.
The library only creates module loggers; handlers are installed here,
on request, never on import.
"""

from __future__ import annotations
from typing import Optional
import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "semlog", level: Optional[int] = None) -> logging.Logger:
    """
    Attach a single stream handler to the `semlog` logger tree.

    Level defaults to SEMLOG_LOG_LEVEL (e.g. DEBUG, INFO), else WARNING.
    Calling this twice does not add a second handler.
    """
    if level is None:
        level_name = os.environ.get("SEMLOG_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
