"""
Console presenter for terminal output.

Diagnostics are written to stderr with a "godo: " prefix; stdout is left
to listings and to the launched command.
"""

import sys

from ..core.interfaces.presenter import IPresenter

PROG_NAME = "godo"


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Streams are looked up on every call so that redirected or captured
    sys.stdout/sys.stderr (e.g. under click's CliRunner) are honoured.
    """

    def __init__(self, use_color: bool = True, file=None, err_file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes on a terminal
            file: Output file (defaults to sys.stdout)
            err_file: Diagnostic file (defaults to sys.stderr)
        """
        self._use_color = use_color
        self._file = file
        self._err_file = err_file

    @property
    def out(self):
        return self._file or sys.stdout

    @property
    def err(self):
        return self._err_file or sys.stderr

    def _colored(self, text: str, code: str) -> str:
        isatty = getattr(self.err, "isatty", None)
        if self._use_color and isatty is not None and isatty():
            return f"\033[{code}m{text}\033[0m"
        return text

    def print(self, message: str) -> None:
        """Print a message to output."""
        print(message, file=self.out)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        print(self._colored(f"{PROG_NAME}: {message}", "91"), file=self.err)

    def print_status(self, message: str) -> None:
        """Print a progress note to stderr."""
        print(f"{PROG_NAME}: {message}", file=self.err)

    def flush(self) -> None:
        """Flush both streams."""
        for stream in (self.out, self.err):
            flush = getattr(stream, "flush", None)
            if flush is not None:
                flush()
