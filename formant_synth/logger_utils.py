"""Logging setup shared by the CLI, the demo driver and the library modules.

Library modules only ask for loggers through :meth:`LoggerUtils.get_logger`;
handlers are attached once, by whichever entry point constructs
:class:`LoggerUtils`.
"""
from __future__ import annotations

import logging
import sys
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import ClassVar, NamedTuple, Optional, Union

__all__ = ["LogLevel", "LoggerUtils", "DEFAULT_NAMESPACE"]

_LOG_FILE_SIZE = 1024 * 1024  # 1MB
_LOG_BACKUP_COUNT = 2

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_NAMESPACE = "FormantSynth"


class LogLevel(NamedTuple):
    name: str
    value: int


class LoggerUtils:
    """Singleton that configures console and optional file logging.

    Attributes:
        _LOGGER_NAMESPACE: Prefix of every logger handed out by ``get_logger``.
        _configured: Set once handlers have been attached.
        _instance: The singleton instance.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Optional["LoggerUtils"]] = None

    def __new__(cls, *args, **kwargs) -> "LoggerUtils":
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: Union[str, Path] = "", *, use_null_console: bool = False) -> None:
        """Attach handlers to the namespace root logger.

        Args:
            filename: Log file path. Empty disables file logging.
            use_null_console: Use a NullHandler instead of writing to stderr.
        """
        if LoggerUtils._configured:
            return

        self.root_logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console = bool(use_null_console) or sys.stderr is None
        # handlers filter further; the logger itself must let records through
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)

        self._console_logging()
        filename = str(filename)
        if filename.strip():
            self._file_logging(filename)

        LoggerUtils._configured = True

    @classmethod
    def reset(cls) -> None:
        """Detach handlers and forget the singleton (used by tests)."""
        root_logger = logging.getLogger(cls._LOGGER_NAMESPACE)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.NOTSET)
        cls._configured = False
        cls._instance = None

    def _console_logging(self) -> None:
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            return

        console_handler = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter("%(levelname)s: %(message)s"))
        self.root_logger.addHandler(console_handler)

    def _file_logging(self, filename: str) -> None:
        if self._has_handler(RotatingFileHandler):
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            self.root_logger.error("Cannot open log file %s; file logging disabled.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)-8s %(name)-32s %(funcName)s\t%(message)s")
        )
        self.root_logger.addHandler(file_handler)

    def _has_handler(self, handler_type: type) -> bool:
        # RotatingFileHandler is a StreamHandler subclass; match exact types.
        return any(type(h) is handler_type for h in self.root_logger.handlers)

    def set_level(self, level: str) -> None:
        """Set the namespace and console level; unknown names fall back to INFO with a warning.

        The file handler keeps logging everything down to DEBUG.
        """
        value = logging.getLevelName(str(level).upper())
        known = isinstance(value, int)
        if not known:
            value = DEFAULT_LOG_LEVEL
        self.root_logger.setLevel(value)
        for handler in self.root_logger.handlers:
            if type(handler) is StreamHandler:
                handler.setLevel(value)
        if not known:
            self.root_logger.warning("Unknown logging level '%s'; using INFO.", level)

    def get_level(self) -> LogLevel:
        value = self.root_logger.getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(value), value=value)

    @staticmethod
    def get_logger(name: Optional[str] = None) -> logging.Logger:
        """Return ``<namespace>.<name>``, or the namespace root when ``name`` is None."""
        namespace = LoggerUtils._LOGGER_NAMESPACE
        if namespace:
            full_name = f"{namespace}.{name}" if name else namespace
        else:
            full_name = name or None
        return logging.getLogger(full_name)
