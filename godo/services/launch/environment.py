"""
Environment filtering for the build and exec steps.

Every transform takes the environment as an explicit mapping and returns
a new dict; os.environ is only read by callers, never written.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

DEFAULT_STRIP = ("GODEBUG",)
DEFAULT_OUTPUT_VAR = "GOBIN"
# Install directory meaning "do not install".
NO_INSTALL_SENTINEL = os.devnull


def without(environ: Mapping[str, str], names: Iterable[str]) -> dict[str, str]:
    """Copy of environ with the named variables removed."""
    drop = set(names)
    return {k: v for k, v in environ.items() if k not in drop}


class EnvironmentFilter:
    """
    Derives the build, fetch and exec environments.

    Args:
        strip: Debug-noise variables removed from the build environment
        output_var: Variable naming the build tool's install directory
        strip_exec: Also remove the strip variables from the exec environment
    """

    def __init__(
        self,
        strip: Iterable[str] = DEFAULT_STRIP,
        output_var: str = DEFAULT_OUTPUT_VAR,
        strip_exec: bool = False,
    ) -> None:
        self._strip = tuple(strip)
        self._output_var = output_var
        self._strip_exec = strip_exec

    def build_environment(self, environ: Mapping[str, str], staging_dir: Path) -> dict[str, str]:
        """Environment for the build: noise stripped, output pinned to staging_dir."""
        env = without(environ, (*self._strip, self._output_var))
        env[self._output_var] = str(staging_dir)
        return env

    def fetch_environment(self, environ: Mapping[str, str]) -> dict[str, str]:
        """Environment for a source fetch: noise stripped, installing disabled."""
        env = without(environ, (*self._strip, self._output_var))
        env[self._output_var] = NO_INSTALL_SENTINEL
        return env

    def exec_environment(self, environ: Mapping[str, str]) -> dict[str, str]:
        """Environment for the launched command: the caller's environment as is."""
        if self._strip_exec:
            return without(environ, self._strip)
        return dict(environ)
