"""Logging service that mirrors a host logger into per-level log files.

:class:`LoggerService` wraps the ``logging.Logger`` a plugin already owns.
Every message is forwarded to that logger and additionally appended to the
log file configured for its level, if any.  Debug messages are dropped
entirely while debug mode is off.
"""
from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path
import traceback
from typing import Any, Optional

from libraryapi.plugins import PLUGIN_MANAGER
from libraryapi.settings import LibrarySettings

__all__ = ["LogFile", "LoggerService"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogFile:
    """Append-only text file receiving timestamped log lines."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    def log(self, message: str) -> None:
        stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        with self.path.open("a", encoding="utf8") as handle:
            handle.write(f"[{stamp}] {message}\n")


def _format(msg: str, args: tuple) -> str:
    if not args:
        return msg
    try:
        return msg % args
    except (TypeError, ValueError):
        return f"{msg} {args!r}"


class LoggerService:
    def __init__(
        self,
        logger: logging.Logger,
        info: Optional[LogFile] = None,
        warn: Optional[LogFile] = None,
        error: Optional[LogFile] = None,
        debug: Optional[LogFile] = None,
    ) -> None:
        self._logger = logger
        self._info = info
        self._warn = warn
        self._error = error
        self._debug = debug
        self._debug_mode = False

    @classmethod
    def in_directory(cls, logger: logging.Logger, path: Path | str) -> "LoggerService":
        """Create a service logging to ``info.log``, ``warn.log``, ``error.log``
        and ``debug.log`` inside ``path``.  Raises ``OSError`` if a file cannot
        be created.
        """

        directory = Path(path)
        return cls(
            logger,
            LogFile(directory / "info.log"),
            LogFile(directory / "warn.log"),
            LogFile(directory / "error.log"),
            LogFile(directory / "debug.log"),
        )

    @classmethod
    def from_settings(cls, logger: logging.Logger, settings: LibrarySettings) -> "LoggerService":
        """Create a service from ``settings.log_directory`` and ``settings.debug``.

        Without a log directory messages are only forwarded to ``logger``.
        """

        if settings.log_directory is not None:
            service = cls.in_directory(logger, settings.log_directory)
        else:
            service = cls(logger)
        service.set_debug_mode(settings.debug)
        return service

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def debug_mode(self) -> bool:
        return self._debug_mode

    def set_debug_mode(self, debug: bool) -> None:
        self._debug_mode = bool(debug)

    def info(self, msg: str, *args: Any, exc: Optional[BaseException] = None) -> None:
        self._emit(logging.INFO, self._info, msg, args, exc)

    def warn(self, msg: str, *args: Any, exc: Optional[BaseException] = None) -> None:
        self._emit(logging.WARNING, self._warn, msg, args, exc)

    warning = warn

    def error(self, msg: str, *args: Any, exc: Optional[BaseException] = None) -> None:
        self._emit(logging.ERROR, self._error, msg, args, exc)

    def debug(self, msg: str, *args: Any, exc: Optional[BaseException] = None) -> None:
        if not self._debug_mode:
            return
        self._emit(logging.DEBUG, self._debug, msg, args, exc)

    def _emit(self, level: int, file: Optional[LogFile], msg: str, args: tuple, exc: Optional[BaseException]) -> None:
        # The file line and the logger record share one rendering.
        text = _format(msg, args)
        if file is not None:
            self._log_message(file, text)
            if exc is not None:
                trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
                self._log_message(file, trace.rstrip("\n"))
        self._logger.log(level, "%s", text, exc_info=exc)

    def _log_message(self, file: LogFile, message: str) -> None:
        try:
            file.log(message)
        except OSError as exc:
            failure = "Unable to save log message to file. Message: %s"
            if file is self._error:
                self._logger.error(failure, message, exc_info=exc)
            else:
                self.error(failure, message, exc=exc)


PLUGIN_MANAGER.expose("logger_service", LoggerService)
