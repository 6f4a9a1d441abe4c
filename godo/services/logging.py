"""
Logger implementation for godo internal diagnostics.

Wraps stdlib logging. Console output goes to stderr, never stdout, which
belongs to the launched command. The optional log file is shared by every
godo process, so records carry the process id.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig

LOG_FILE_PATH = Path.home() / ".godo" / "godo.log"
MAX_FILE_SIZE = 1024 * 1024  # 1MB
BACKUP_COUNT = 2

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_FORMAT = "%(asctime)s godo[%(process)d] %(levelname)s: %(message)s"


def _level(name: str) -> int:
    return _LEVELS.get(name.lower(), logging.WARNING)


class GodoLogger(ILogger):
    """
    stdlib-backed logger with optional stderr and rotating file output.

    With neither output enabled every call is a cheap no-op, which is the
    default for a launch.
    """

    def __init__(
        self,
        name: str = "godo",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: stdlib logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Write records to stderr
            file_enabled: Append records to the rotating log file
            log_file: Log file location (defaults to ~/.godo/godo.log)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        for old in list(self._logger.handlers):
            self._logger.removeHandler(old)
            old.close()

        formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
        if console_enabled:
            self._logger.addHandler(logging.StreamHandler(sys.stderr))
        if file_enabled:
            path = log_file or LOG_FILE_PATH
            path.parent.mkdir(parents=True, exist_ok=True)
            self._logger.addHandler(
                RotatingFileHandler(path, maxBytes=MAX_FILE_SIZE, backupCount=BACKUP_COUNT)
            )
        for handler in self._logger.handlers:
            handler.setFormatter(formatter)
        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, log_file: Path | None = None) -> GodoLogger:
        """Logger for a [logging] config section."""
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=log_file,
        )

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._logger.handlers)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set the level on every handler."""
        for handler in self._logger.handlers:
            handler.setLevel(_level(level))

    def flush(self) -> None:
        for handler in self._logger.handlers:
            handler.flush()


class NullLogger(ILogger):
    """Discards everything; the default when nothing is bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
