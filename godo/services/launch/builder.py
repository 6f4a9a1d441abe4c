"""
Build invoker service.

Runs the go command against a resolved package and blocks until it
exits. Build output goes to the controlling terminal when one can be
opened, otherwise to godo's stderr; godo's stdout is never used.
"""

from __future__ import annotations

import io
import os
import subprocess
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from ...core.di import LazyService
from ...core.exceptions import BuildError
from ...core.interfaces.logger import ILogger
from ...core.models.launch import ResolvedPackage
from ..logging import NullLogger

TTY_PATH = "/dev/tty"
STDERR_FILENO = 2


def _stream_target(stream: IO[Any] | None) -> IO[Any] | int:
    """A stream usable as a child's stdout/stderr, else godo's stderr descriptor."""
    try:
        stream.flush()
        stream.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return STDERR_FILENO
    return stream


class BuildInvoker:
    """
    Runs `go build` (and optionally `go get`) as a blocking subprocess.

    Args:
        go: The go command
        use_tty: Send build output to the controlling terminal if possible
        tty_path: Terminal device opened for build output
        logger: Logger for internal diagnostics
    """

    logger = LazyService(ILogger, NullLogger)

    def __init__(
        self,
        go: str = "go",
        use_tty: bool = True,
        tty_path: str = TTY_PATH,
        logger: ILogger | None = None,
    ) -> None:
        self._go = go
        self._use_tty = use_tty
        self._tty_path = tty_path
        self.logger = logger

    def build_command(self, builder_flags: list[str], staging_dir: Path, target: str = ".") -> list[str]:
        """
        The build command line.

        The trailing separator on the output directory makes go treat it
        as a directory to put the binary in even when it does not exist
        yet, instead of as the binary's own path.
        """
        return [
            self._go,
            "build",
            *builder_flags,
            "-o",
            str(staging_dir) + os.sep,
            target,
        ]

    def fetch_command(self, spec: str, builder_flags: list[str]) -> list[str]:
        """The `go get -d` command line downloading spec's source."""
        return [self._go, "get", *builder_flags, "-d", spec]

    @contextmanager
    def _output(self) -> Iterator[IO[Any] | int]:
        """Stream build output is written to, opened independently of godo's stdio."""
        if self._use_tty:
            try:
                tty = open(self._tty_path, "w")  # noqa: SIM115
            except OSError as e:
                self.logger.debug("No controlling terminal (%s), using stderr", e)
            else:
                with tty:
                    yield tty
                return
        yield _stream_target(sys.stderr)

    def _run(self, command: list[str], cwd: Path | None, env: Mapping[str, str]) -> int:
        self.logger.debug("Running %s in %s", command, cwd)
        with self._output() as out:
            try:
                proc = subprocess.run(
                    command,
                    cwd=cwd,
                    env=dict(env),
                    stdin=subprocess.DEVNULL,
                    stdout=out,
                    stderr=out,
                )
            except FileNotFoundError as e:
                raise BuildError(
                    f"go command not found: {self._go}", command=command, cause=e
                ) from e
            except OSError as e:
                raise BuildError(f"cannot run go command: {e}", command=command, cause=e) from e
        self.logger.debug("Exited: code=%d", proc.returncode)
        return proc.returncode

    def invoke(
        self,
        package: ResolvedPackage,
        builder_flags: list[str],
        staging_dir: Path,
        env: Mapping[str, str],
    ) -> None:
        """
        Build package into staging_dir.

        Raises:
            BuildError: If the build exits non-zero or cannot be started
        """
        command = self.build_command(builder_flags, staging_dir)
        code = self._run(command, package.source_dir, env)
        if code != 0:
            raise BuildError(
                f"error building command {package.import_identifier}",
                exit_code=code,
                command=command,
            )

    def fetch(self, spec: str, builder_flags: list[str], env: Mapping[str, str]) -> None:
        """
        Download spec's source with `go get -d`.

        Raises:
            BuildError: If the fetch exits non-zero or cannot be started
        """
        command = self.fetch_command(spec, builder_flags)
        code = self._run(command, None, env)
        if code != 0:
            raise BuildError(f"error getting package {spec}", exit_code=code, command=command)
