"""Logging configuration helper for applications using nexara."""

from __future__ import annotations

import logging
from typing import Optional, Union

from nexara.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _normalise_level(level: Optional[Union[str, int]]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        resolved = logging.getLevelName(value)
        if isinstance(resolved, int):
            return resolved
    return logging.WARNING


def configure_logging(level: Optional[Union[str, int]] = None) -> int:
    """Route log records to stderr at *level* (default ``settings.log_level``).

    Existing root handlers are replaced so repeated calls do not duplicate
    output.  Returns the numeric level applied.
    """
    log_level = _normalise_level(level if level is not None else settings.log_level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    return log_level
