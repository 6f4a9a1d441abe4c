"""
Presenter interface for user-facing output.

Diagnostics always go to stderr; stdout is reserved for listings and,
after the exec, for the launched program itself.
"""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    """Interface for output presentation."""

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a message to output."""
        pass

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        pass

    @abstractmethod
    def print_status(self, message: str) -> None:
        """Print a single-line progress note to stderr."""
        pass

    def flush(self) -> None:
        """Flush pending output; called right before exec."""
