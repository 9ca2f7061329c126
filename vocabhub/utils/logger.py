"""Logging setup for the application."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(
    name: str = "vocabhub",
    level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """
    Configure and return the application logger.

    Safe to call repeatedly: the stream handler is only attached once.

    Args:
        name: Logger name (the package logger by default)
        level: Level name or number (defaults to Config.LOG_LEVEL)

    Returns:
        Configured logger
    """
    if level is None:
        from ..config import Config
        level = Config.LOG_LEVEL

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(getattr(h, "_vocabhub", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._vocabhub = True
        logger.addHandler(handler)

    return logger
