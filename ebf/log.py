"""Logging setup for the interpreter and its command line."""

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "ebf"
LOG_ENV = "EBF_LOG"
LOG_FORMAT = "%(levelname)-5s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _resolve_level(level: Union[str, int, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_ENV, "warning")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level '{level}'")
    return resolved


def init_logging(level: Union[str, int, None] = None) -> logging.Logger:
    """Configure the package logger to write to stderr.

    The level comes from `level` or the EBF_LOG environment variable,
    defaulting to WARNING. Calling this again replaces the handler.
    """
    logger = get_logger()
    logger.setLevel(_resolve_level(level))

    for h in list(logger.handlers):
        if getattr(h, "_ebf_handler", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ebf_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
