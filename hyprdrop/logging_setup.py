"""Logging setup: colored terminal output, optional log file and debug switch."""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "should_colorize",
]

_ESC = "\x1b["
_RESET = f"{_ESC}0m"

# (prefix, suffix) pairs by level
_STYLES = {
    logging.WARNING: (f"{_ESC}33;2m", _RESET),
    logging.ERROR: (f"{_ESC}31;2m", _RESET),
    logging.CRITICAL: (f"{_ESC}31;1m", _RESET),
}


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = bool(os.environ.get("DEBUG"))


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    Honors NO_COLOR and FORCE_COLOR, then falls back to TTY detection.

    Args:
        stream: The output stream to check. Defaults to sys.stderr.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """A formatter adding colors based on the log level."""

    def __init__(self, colored: bool | None = None) -> None:
        super().__init__()
        log_format = r"%(name)12s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        use_colors = should_colorize() if colored is None else colored
        self._formatters: dict[int, logging.Formatter] = {}
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            prefix, suffix = _STYLES.get(level, ("", "")) if use_colors else ("", "")
            self._formatters[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._formatters[logging.INFO]).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "hyprdrop", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.INFO)
    else:
        logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    for handler in LogObjects.handlers:
        logger.addHandler(handler)
    return logger
