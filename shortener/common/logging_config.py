"""Logging setup shared by the server and the operator scripts."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "url_shortener"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)

# Driver loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("pymongo", "asyncpg", "httpcore")


def _attach(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``url_shortener`` logger and return it.

    Calling this again replaces the handlers from the previous call, so the
    test suite and the scripts can each set their own level.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Also append to this file when given
        json_format: Emit one JSON object per line instead of plain text
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(JSON_FORMAT if json_format else TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    _attach(logger, logging.StreamHandler(sys.stdout), formatter, numeric_level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file), formatter, numeric_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Child of the service logger, e.g. ``get_logger("web")``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)
