"""
Custom exception hierarchy for godo.

Every failure of a launch is terminal for that run. Each exception carries
the exit code the CLI should terminate with, so the top-level handler only
has to print the message and exit.
"""

from __future__ import annotations

from enum import Enum

EXIT_FAILURE = 1
EXIT_USAGE = 2


class GodoException(Exception):
    """
    Base exception for all godo errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, commands, etc.)
        exit_code: Exit code for the CLI (default: 1)
    """

    exit_code: int = EXIT_FAILURE

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class GodoConfigError(GodoException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(GodoConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(GodoConfigError, ValueError):
    """
    Invalid or unknown configuration value.

    Inherits from ValueError so callers validating input can catch either.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Usage Errors
# =============================================================================


class UsageError(GodoException, ValueError):
    """
    Malformed invocation arguments.

    Raised before any subprocess is launched.
    """

    exit_code = EXIT_USAGE

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if argument is not None:
            ctx["argument"] = argument
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionKind(str, Enum):
    """Why a package spec could not be turned into a command package."""

    NOT_FOUND = "not_found"
    NO_BUILDABLE_UNITS = "no_buildable_units"
    NOT_EXECUTABLE = "not_executable"
    AMBIGUOUS = "ambiguous"


# Kinds that stem from what the user asked for rather than filesystem state.
_USAGE_KINDS = {ResolutionKind.NOT_EXECUTABLE, ResolutionKind.AMBIGUOUS}


class ResolutionError(GodoException):
    """
    A package spec does not denote a single buildable command package.

    The exit code depends on the kind: asking for a library or an
    ambiguous directory is a usage error (2), a missing or empty
    directory is a plain failure (1).
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ResolutionKind,
        spec: str | None = None,
        directory: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.kind = kind
        ctx = context or {}
        if spec is not None:
            ctx["spec"] = spec
        if directory is not None:
            ctx["directory"] = directory
        super().__init__(message, context=ctx, cause=cause)
        self.exit_code = EXIT_USAGE if kind in _USAGE_KINDS else EXIT_FAILURE


# =============================================================================
# Execution Errors
# =============================================================================


class GodoExecutionError(GodoException):
    """Base class for failures after the package was resolved."""

    pass


class BuildError(GodoExecutionError):
    """
    The external build (or fetch) command failed.

    Its own diagnostics were already streamed to the terminal, so the
    message is a one-line summary.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        command: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        if command:
            ctx["command"] = " ".join(command)
        super().__init__(message, context=ctx, cause=cause)


class StagingError(GodoExecutionError):
    """Filesystem failure creating the staging directory or copying the artifact."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class ExecError(GodoExecutionError):
    """
    The final process replacement failed.

    The message names argv[0], the full argv and the environment that
    were attempted.
    """

    def __init__(
        self,
        message: str,
        *,
        executable: str,
        argv: list[str],
        environ: dict[str, str],
        cause: Exception | None = None,
    ) -> None:
        self.executable = executable
        self.argv = argv
        self.environ = environ
        detail = f"error execing command [argv0={executable!r}, argv={argv!r}, environ={environ!r}]"
        super().__init__(f"{detail}: {message}", cause=cause)
