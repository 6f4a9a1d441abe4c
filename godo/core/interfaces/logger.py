"""
Logger interface for godo's internal diagnostics.

Diagnostics are distinct from what godo tells the user (IPresenter):
they are off by default, go to stderr or a log file when enabled, and
must be flushed before the process image is replaced.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Interface for internal logging.

    Messages use %-style arguments, formatted only when the level is enabled.
    """

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""

    @abstractmethod
    def set_level(self, level: str) -> None:
        """
        Set the logging level.

        Args:
            level: One of 'debug', 'info', 'warning', 'error'
        """

    def flush(self) -> None:
        """Push buffered records out; called right before exec."""
