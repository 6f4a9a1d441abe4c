"""
Launcher service: the terminal process replacement.

In exec mode the current process image is replaced with os.execve, so
on success nothing after the call ever runs and the launched command's
exit status is the one the caller observes. Where exec is unavailable
(Windows) or spawn mode is configured, the command runs as a child and
its exit status is handed back so the CLI can exit the same way.
"""

from __future__ import annotations

import os
import signal
import subprocess
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from ...core.di import LazyService
from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import LaunchMode
from ...core.models.launch import ExecPlan, LaunchFailed, LaunchOutcome, Replaced
from ...presenters.console import ConsolePresenter
from ..logging import NullLogger

ExecFn = Callable[[str, list[str], dict[str, str]], None]


def _ignore_interrupt(signum, frame) -> None:
    pass


@contextmanager
def ignoring_interrupts() -> Iterator[None]:
    """
    Keep SIGINT from stopping godo while it waits for the child.

    A Python-level handler, unlike SIG_IGN, is reset to the default in
    the child on exec, so Ctrl-C still stops the child.
    """
    original = signal.signal(signal.SIGINT, _ignore_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, original)


def exec_supported() -> bool:
    """Whether this platform replaces the process image in place."""
    return os.name != "nt" and hasattr(os, "execve")


class Launcher:
    """
    Replaces the current process with a staged artifact.

    Args:
        mode: 'exec' to replace the process, 'spawn' to run and wait
        announce: Print 'starting <command>' to stderr first
        execve: Exec function (defaults to os.execve)
        presenter: Where the announcement is written
        logger: Logger for internal diagnostics
    """

    logger = LazyService(ILogger, NullLogger)
    presenter = LazyService(IPresenter, ConsolePresenter)

    def __init__(
        self,
        mode: LaunchMode = "exec",
        announce: bool = True,
        execve: ExecFn | None = None,
        presenter: IPresenter | None = None,
        logger: ILogger | None = None,
    ) -> None:
        if mode == "exec" and not exec_supported():
            mode = "spawn"
        self._mode = mode
        self._announce = announce
        self._execve = execve or os.execve
        self.presenter = presenter
        self.logger = logger

    @property
    def mode(self) -> LaunchMode:
        return self._mode

    def launch(self, plan: ExecPlan, command_name: str) -> LaunchOutcome:
        """
        Run plan in place of the current process.

        Returns only when exec failed (LaunchFailed) or in spawn mode
        (Replaced with the child's exit status).
        """
        if self._announce:
            self.presenter.print_status(f"starting {command_name}")
        self.logger.debug("Launching %s (%s): argv=%s", plan.executable_path, self._mode, plan.argv)
        self._flush()

        if self._mode == "spawn":
            return self._spawn(plan)

        try:
            self._execve(str(plan.executable_path), list(plan.argv), dict(plan.environ))
        except OSError as e:
            self.logger.error("exec of %s failed: %s", plan.executable_path, e)
            return LaunchFailed(reason=str(e) or type(e).__name__)
        # Only reachable with a non-replacing execve stand-in.
        return Replaced()

    def _spawn(self, plan: ExecPlan) -> LaunchOutcome:
        try:
            with ignoring_interrupts():
                proc = subprocess.run(
                    list(plan.argv),
                    executable=str(plan.executable_path),
                    env=dict(plan.environ),
                )
        except OSError as e:
            self.logger.error("spawn of %s failed: %s", plan.executable_path, e)
            return LaunchFailed(reason=str(e) or type(e).__name__)
        code = proc.returncode
        self.logger.debug("Child exited: code=%d", code)
        if code < 0:
            return Replaced(signal=-code)
        return Replaced(exit_code=code)

    def _flush(self) -> None:
        self.presenter.flush()
        self.logger.flush()
