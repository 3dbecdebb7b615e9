"""
Logger Model - Immutable tagged logger and its severity levels.
"""
from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict

from shared.services.logger import VERBOSE, emit, is_tag_loggable


class Level(IntEnum):
    """Ordered severity levels, least severe first."""
    VERBOSE = 2
    DEBUG = 3
    INFO = 4
    WARN = 5
    ERROR = 6
    ASSERT = 7

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level number."""
        return _LOGGING_LEVELS[self]

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Exact, case-sensitive lookup by member name."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown level: {name}") from None

    @classmethod
    def coerce(cls, value: Union["Level", int]) -> Optional["Level"]:
        """
        Level for a member value (2-7) or a stdlib level number.

        Returns None for anything else.
        """
        if not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return _STDLIB_LEVELS.get(value)


_LOGGING_LEVELS = {
    Level.VERBOSE: VERBOSE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.ASSERT: logging.CRITICAL,
}
_STDLIB_LEVELS = {number: level for level, number in _LOGGING_LEVELS.items()}


def _split_error(args: tuple) -> tuple[Optional[BaseException], tuple]:
    if args and isinstance(args[0], BaseException):
        return args[0], args[1:]
    return None, args


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return object.__repr__(value)


def _format(message: Any, args: tuple) -> str:
    try:
        text = str(message)
    except Exception:
        text = _safe_repr(message)
    if not args:
        return text
    if len(args) == 1 and isinstance(args[0], Mapping):
        args = args[0]
    try:
        return text % args
    except Exception as e:
        shown = _safe_repr(args) if isinstance(args, Mapping) else ", ".join(_safe_repr(arg) for arg in args)
        return f"{text} [format failed: {type(e).__name__}; args=({shown})]"


class Logger(BaseModel):
    """
    Tagged logger with a minimum severity.

    - tag: Label written with every line (the stdlib logger name)
    - level: Lowest severity this logger emits
    - filter_check_enabled: Also ask the platform filter before emitting

    Emit methods take ``(message, *args)`` or ``(message, error, *args)``; an
    exception passed as the first argument is attached to the line and the
    rest are ``%``-substituted into the message.
    """
    model_config = ConfigDict(frozen=True)

    tag: str
    level: Level
    filter_check_enabled: bool = True

    def __init__(
        self,
        tag: str,
        level: Level = Level.VERBOSE,
        filter_check_enabled: bool = True,
        **data: Any,
    ):
        super().__init__(tag=tag, level=level, filter_check_enabled=filter_check_enabled, **data)

    def is_enabled(self, level: Union[Level, int]) -> bool:
        """Whether a message of ``level`` would be written; False for unknown levels."""
        level = Level.coerce(level)
        if level is None or level < self.level:
            return False
        if self.filter_check_enabled:
            return is_tag_loggable(self.tag, level.logging_level)
        return True

    is_loggable = is_enabled

    def is_verbose_enabled(self) -> bool:
        return self.is_enabled(Level.VERBOSE)

    def is_debug_enabled(self) -> bool:
        return self.is_enabled(Level.DEBUG)

    def is_info_enabled(self) -> bool:
        return self.is_enabled(Level.INFO)

    def is_warn_enabled(self) -> bool:
        return self.is_enabled(Level.WARN)

    def is_error_enabled(self) -> bool:
        return self.is_enabled(Level.ERROR)

    def is_assert_enabled(self) -> bool:
        return self.is_enabled(Level.ASSERT)

    def log(self, level: Union[Level, int], message: Any, *args: Any) -> None:
        """Write ``message`` at ``level`` if enabled; unknown levels write nothing."""
        level = Level.coerce(level)
        if level is None or not self.is_enabled(level):
            return
        error, args = _split_error(args)
        emit(self.tag, level.logging_level, _format(message, args), error)

    def v(self, message: Any, *args: Any) -> None:
        self.log(Level.VERBOSE, message, *args)

    def d(self, message: Any, *args: Any) -> None:
        self.log(Level.DEBUG, message, *args)

    def i(self, message: Any, *args: Any) -> None:
        self.log(Level.INFO, message, *args)

    def w(self, message: Any, *args: Any) -> None:
        self.log(Level.WARN, message, *args)

    def e(self, message: Any, *args: Any) -> None:
        self.log(Level.ERROR, message, *args)

    def a(self, message: Any, *args: Any) -> None:
        self.log(Level.ASSERT, message, *args)

    verbose = v
    debug = d
    info = i
    warn = w
    error = e
    wtf = a
