"""
Logger Service - Platform log sink backed by stdlib logging.

Tagged loggers hand their formatted lines to this module. Each tag is written
through the stdlib logger of the same name, so per-tag thresholds set with
``logging.getLogger(tag).setLevel(...)`` act as the platform filter.
"""
import logging
import sys
from typing import Optional

from config.settings import settings


VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


# Configure root logger
def setup_logging() -> None:
    """Setup root logging configuration from settings."""
    logging.basicConfig(
        level=_resolve_level(settings.LOG_LEVEL),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__ or module path)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def is_tag_loggable(tag: str, level: int) -> bool:
    """Platform filter: whether the stdlib logger for ``tag`` accepts ``level``."""
    return logging.getLogger(tag).isEnabledFor(level)


def emit(tag: str, level: int, message: str, error: Optional[BaseException] = None) -> None:
    """
    Write one line for ``tag`` at stdlib ``level``.

    The caller has already decided the line is enabled, so the stdlib level of
    ``tag`` is not checked again. The message is passed without arguments so
    stray ``%`` characters are written as-is.
    """
    logger = logging.getLogger(tag)
    exc_info = (type(error), error, error.__traceback__) if error is not None else None
    record = logger.makeRecord(logger.name, level, "(tag-logger)", 0, message, (), exc_info)
    logger.handle(record)


# Setup logging on module import
setup_logging()
