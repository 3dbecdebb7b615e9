"""
Tag Logger Module - Tagged loggers resolved by dotted name.

Structure:
- services/logger_manager.py: configuration load and longest-prefix lookup
- services/properties_loader.py: ``.properties`` file reading

Usage::

    from modules.tag_logger import get_logger

    log = get_logger(__name__)
    log.d("Loaded %d items", count)
"""
from typing import Any

from shared.models.logger_model import Level, Logger
from modules.tag_logger.services.logger_manager import LoggerManager

_CALLER = object()


def get_logger(target: Any = _CALLER) -> Logger:
    """
    Logger for ``target``.

    Args:
        target: Dotted name, class, module or object; None for the root.
            Omitted, the calling module (and class) is used.

    Returns:
        Configured logger, never None
    """
    manager = LoggerManager.get_instance()
    if target is _CALLER:
        return manager.get_caller_logger()
    return manager.get_logger(target)


# Root logger, resolved once on import
ROOT = get_logger(None)

__all__ = [
    "Level",
    "Logger",
    "LoggerManager",
    "ROOT",
    "get_logger",
]
