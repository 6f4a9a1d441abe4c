"""
Argument splitter service for the launch command.

Partitions the raw argument vector into builder flags, the package spec
and the program's own arguments.
"""

from __future__ import annotations

import os
from pathlib import Path

from ...core.di import LazyService
from ...core.exceptions import UsageError
from ...core.interfaces.logger import ILogger
from ...core.models.config import SplitPolicy
from ...core.models.launch import DEFAULT_PACKAGE_SPEC, SEPARATOR, ParsedInvocation
from ..logging import NullLogger

HELP_FLAGS = ("-h", "--help")

USAGE = """godo is an alternative to `go run`.

Usage:
  godo [go build flags] [--] <package spec> [command arguments]
  godo -h | --help

The package spec is a directory ("." by default) or an import path. With
the heuristic split policy the first argument not starting with "-" is the
package spec; "--" always marks the package spec explicitly. The package is
built with `go build`, staged under $GOPATH/godo and then executed in place
of godo with the remaining arguments.
"""


def is_help_request(args: list[str]) -> bool:
    """A lone -h or --help asks for usage instead of a launch."""
    return len(args) == 1 and args[0] in HELP_FLAGS


def relativize_spec(spec: str, cwd: Path) -> str:
    """
    Rewrite an absolute package spec relative to cwd.

    The go command resolves relative specs against package roots, not
    the filesystem root, so an absolute spec is turned into a './'
    relative path. If no relative form exists (another drive), the spec
    is returned unchanged.
    """
    if not os.path.isabs(spec):
        return spec
    try:
        rel = os.path.relpath(spec, cwd)
    except ValueError:
        return spec
    rel = rel.replace(os.sep, "/")
    if rel == "." or rel.startswith("../") or rel == "..":
        return rel
    return f"./{rel}"


class ArgumentSplitter:
    """
    Splits the launch arguments according to one policy.

    heuristic: the first token not starting with '-' is the package spec.
    separator: the token after the first '--' is the package spec.

    Under both policies '--' marks the spec explicitly, a trailing '--' is
    a usage error, and an argument list made only of flags builds '.'.
    """

    logger = LazyService(ILogger, NullLogger)

    def __init__(
        self,
        policy: SplitPolicy = "heuristic",
        cwd: Path | None = None,
        logger: ILogger | None = None,
    ) -> None:
        if policy not in ("heuristic", "separator"):
            raise ValueError(f"Unknown split policy: {policy}")
        self._policy = policy
        self._cwd = cwd
        self.logger = logger

    @property
    def policy(self) -> SplitPolicy:
        return self._policy

    def split(self, args: list[str]) -> ParsedInvocation:
        """
        Split args (without the program name).

        Raises:
            UsageError: On a trailing '--', or a bare package spec under
                the separator policy
        """
        self.logger.debug("ArgumentSplitter.split: policy=%s, args=%s", self._policy, args)
        parsed = self._split(args)
        if not parsed.spec_defaulted and os.path.isabs(parsed.package_spec):
            spec = relativize_spec(parsed.package_spec, self._cwd or Path.cwd())
            parsed = parsed.model_copy(update={"package_spec": spec})
        self.logger.debug(
            "Parsed: flags=%s, spec=%s, program_args=%s",
            parsed.builder_flags,
            parsed.package_spec,
            parsed.program_args,
        )
        return parsed

    def _split(self, args: list[str]) -> ParsedInvocation:
        for i, arg in enumerate(args):
            if arg == SEPARATOR:
                return self._after_separator(args, i)
            if arg.startswith("-"):
                continue
            if not arg:
                raise UsageError("empty package spec")
            if self._policy == "separator":
                raise UsageError(
                    'expected "--" then a command package directory path', argument=arg
                )
            return ParsedInvocation(
                builder_flags=list(args[:i]),
                package_spec=arg,
                program_args=list(args[i + 1 :]),
            )

        return ParsedInvocation(
            builder_flags=list(args),
            package_spec=DEFAULT_PACKAGE_SPEC,
            spec_defaulted=True,
        )

    @staticmethod
    def _after_separator(args: list[str], index: int) -> ParsedInvocation:
        rest = args[index + 1 :]
        if not rest:
            raise UsageError('expected a command package directory path after "--"')
        if not rest[0]:
            raise UsageError("empty package spec")
        return ParsedInvocation(
            builder_flags=list(args[:index]),
            package_spec=rest[0],
            program_args=list(rest[1:]),
            used_separator=True,
        )
