"""Pluggable log handling with a process-wide logger."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log message, in increasing order."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    NONE = 5


class LogHandler(ABC):
    """Receives log messages; subclass and register to change how logging is done."""

    @abstractmethod
    def log(self, file: str, line: int, level: LogLevel, message: str) -> None:
        """Handle one log message."""


class DefaultLogHandler(LogHandler):
    """Writes messages to standard output as ``[LEVEL] file:line: message``."""

    def log(self, file: str, line: int, level: LogLevel, message: str) -> None:
        try:
            name = LogLevel(level).name
        except ValueError:
            return
        print(f"[{name}] {file}:{line}: {message}", file=sys.stdout, flush=True)


class Logger:
    """Holds the active log level and handler."""

    def __init__(self) -> None:
        self.level = LogLevel.INFO
        self._handler: LogHandler | None = DefaultLogHandler()

    @property
    def handler(self) -> LogHandler:
        if self._handler is None:
            self._handler = DefaultLogHandler()
        return self._handler

    def set_level(self, level: LogLevel) -> None:
        self.level = LogLevel(level)

    def register_handler(self, handler: LogHandler | None) -> None:
        self._handler = handler

    def unregister_handler(self) -> None:
        self._handler = DefaultLogHandler()

    def log(self, file: str, line: int, level: LogLevel, message: str) -> None:
        """Pass a message to the handler, whatever its level."""
        self.handler.log(file, line, level, message)


_logger = Logger()


def get_logger() -> Logger:
    """Return the process-wide logger."""
    return _logger


def register_log_handler(handler: LogHandler) -> None:
    """Send subsequent log messages to ``handler``."""
    _logger.register_handler(handler)


def unregister_log_handler() -> None:
    """Restore the default handler."""
    _logger.unregister_handler()


def set_log_level(level: LogLevel) -> None:
    """Suppress messages below ``level``."""
    _logger.set_level(level)


def log(file: str, line: int, level: LogLevel, fmt: str, *args: object) -> None:
    """Format a printf-style message and log it if its level is enabled."""
    if level < _logger.level:
        return
    message = fmt % args if args else fmt
    _logger.log(file, line, level, message)