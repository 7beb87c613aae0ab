"""Package-wide logger with a configurable output and level."""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Severity threshold of the package logger."""

    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    PANIC = 6


_PANIC_LEVEL = logging.CRITICAL + 10
logging.addLevelName(_PANIC_LEVEL, "PANIC")

_PY_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.PANIC: _PANIC_LEVEL,
}

_TAGS = {
    LogLevel.DEBUG: "[DEBUG]",
    LogLevel.INFO: "[INFO ]",
    LogLevel.WARN: "[WARN ]",
    LogLevel.ERROR: "[ERROR]",
    LogLevel.FATAL: "[FATAL]",
    LogLevel.PANIC: "[PANIC]",
}

_logger = logging.getLogger("tradex")
_logger.propagate = False
_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(
    logging.Formatter("%(asctime)s [tradex] %(pathname)s:%(lineno)d %(message)s")
)
_logger.addHandler(_handler)

_level = LogLevel.WARN
_logger.setLevel(_PY_LEVELS[_level])


def set_out(out: TextIO) -> None:
    """Send log lines to out."""
    _handler.setStream(out)


def set_level(level: LogLevel) -> None:
    """Drop messages below level."""
    global _level
    _level = LogLevel(level)
    _logger.setLevel(_PY_LEVELS[_level])


def _emit(level: LogLevel, msg: str, args: tuple[Any, ...]) -> None:
    _logger.log(_PY_LEVELS[level], f"{_TAGS[level]} {msg}", *args, stacklevel=3)


def debug(msg: str, *args: Any) -> None:
    """Log a debug message; args are %-formatted into msg."""
    _emit(LogLevel.DEBUG, msg, args)


def info(msg: str, *args: Any) -> None:
    """Log an informational message."""
    _emit(LogLevel.INFO, msg, args)


def warn(msg: str, *args: Any) -> None:
    """Log a warning."""
    _emit(LogLevel.WARN, msg, args)


def error(msg: str, *args: Any) -> None:
    """Log an error."""
    _emit(LogLevel.ERROR, msg, args)


def fatal(msg: str, *args: Any) -> None:
    """Log and exit with status 1, unless the level is above FATAL."""
    if _level <= LogLevel.FATAL:
        _emit(LogLevel.FATAL, msg, args)
        raise SystemExit(1)


def panic(msg: str, *args: Any) -> None:
    """Log and raise RuntimeError, unless the level is above PANIC."""
    if _level <= LogLevel.PANIC:
        _emit(LogLevel.PANIC, msg, args)
        raise RuntimeError(msg % args if args else msg)