#!/usr/bin/env python3
"""Structured logging for FSSearch.

A thin wrapper over :mod:`logging` that renders keyword context after the
message (``Wildcard search complete | root=/data matches=4``). Context can
also be pushed for a block with :meth:`Logger.add_context`; it is kept per
thread.

Example:
    >>> logger = Logger(level=LogLevel.DEBUG)
    >>> with logger.add_context(root="/data"):
    ...     logger.debug("Applying rule", rule="+wf:**/*.txt")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from fssearch.core.constants import ConfigKey

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation settings for --log-file / fssearch.logging.file
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, level: Union["LogLevel", int, str]) -> "LogLevel":
        """Convert a level name (any case) or number into a LogLevel."""
        if isinstance(level, str):
            return cls[level.strip().upper()]
        return cls(level)


def _formatter() -> logging.Formatter:
    return logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)


class Logger:
    """Named logger that appends key=value context to every record."""

    _local = threading.local()

    def __init__(
        self,
        name: str = "fssearch",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Existing handlers on the underlying logger are replaced, and records
        do not propagate to the root logger.

        Args:
            name: Logger name
            level: Minimum level to emit
            handlers: Output handlers (a stderr console handler if omitted)
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            console = logging.StreamHandler()
            console.setFormatter(_formatter())
            handlers = [console]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)
        self.logger.propagate = False

    @classmethod
    def from_config(cls, config, name: str = "fssearch") -> "Logger":
        """Build a logger from ``fssearch.logging.level`` and ``fssearch.logging.file``."""
        logger = cls(name=name, level=config.get(ConfigKey.LOGGING_LEVEL, "WARNING"))
        log_file = config.get(ConfigKey.LOGGING_FILE)
        if log_file:
            logger.add_handler(logger.create_file_handler(log_file))
        return logger

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = LOG_FILE_MAX_BYTES,
        backup_count: int = LOG_FILE_BACKUPS,
    ) -> logging.handlers.RotatingFileHandler:
        """Create a rotating file handler using the standard format."""
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(_formatter())
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        self.logger.setLevel(LogLevel.parse(level))

    @classmethod
    def _frames(cls) -> List[Dict[str, Any]]:
        frames = getattr(cls._local, "frames", None)
        if frames is None:
            frames = cls._local.frames = []
        return frames

    @contextmanager
    def add_context(self, **kwargs) -> Iterator[None]:
        """Attach context to every record logged inside the block.

        Example:
            >>> with logger.add_context(root="/data"):
            ...     logger.info("Parsing rules")
        """
        frames = self._frames()
        frames.append(kwargs)
        try:
            yield
        finally:
            frames.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any], **kwargs) -> None:
        if not self.logger.isEnabledFor(level):
            return

        merged: Dict[str, Any] = {}
        for frame in self._frames():
            merged.update(frame)
        merged.update(context)

        if merged:
            msg = msg + " | " + " ".join(f"{k}={v}" for k, v in merged.items())
        self.logger.log(level, msg, extra={"context": merged}, **kwargs)

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)

    def exception(self, msg: str, exc: BaseException, **context) -> None:
        """Log at ERROR with the exception's type, message and traceback."""
        context["exception_type"] = type(exc).__name__
        context["exception_message"] = str(exc)
        self._log(LogLevel.ERROR, msg, context, exc_info=exc)


_global_logger: Optional[Logger] = None


def get_logger(name: str = "fssearch") -> Logger:
    """Return the shared logger, creating it on first use or when the name changes."""
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Optional[Logger]) -> None:
    """Install the shared logger; ``None`` resets it."""
    global _global_logger
    _global_logger = logger
