"""
Unit tests for the godo exception hierarchy and its exit codes.
"""

import pytest

from godo.core.exceptions import (
    EXIT_FAILURE,
    EXIT_USAGE,
    BuildError,
    ConfigValidationError,
    ExecError,
    GodoException,
    ResolutionError,
    ResolutionKind,
    StagingError,
    UsageError,
)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ResolutionKind.NOT_FOUND, EXIT_FAILURE),
        (ResolutionKind.NO_BUILDABLE_UNITS, EXIT_FAILURE),
        (ResolutionKind.NOT_EXECUTABLE, EXIT_USAGE),
        (ResolutionKind.AMBIGUOUS, EXIT_USAGE),
    ],
)
def test_resolution_exit_code_follows_kind(kind, expected):
    err = ResolutionError("x", kind=kind)

    assert err.exit_code == expected
    assert err.kind == kind


def test_usage_error():
    err = UsageError("bad", argument="./cmd")

    assert err.exit_code == EXIT_USAGE
    assert isinstance(err, ValueError)
    assert str(err) == "bad (argument='./cmd')"


@pytest.mark.parametrize("cls", [BuildError, StagingError])
def test_execution_errors_exit_one(cls):
    assert cls("failed").exit_code == EXIT_FAILURE


def test_context_rendered():
    err = BuildError("error building command x", exit_code=2, command=["go", "build", "."])

    assert str(err) == "error building command x (exit_code=2, command='go build .')"


def test_exec_error_names_attempt():
    err = ExecError(
        "Permission denied",
        executable="/stage/hello.1",
        argv=["/stage/hello.1", "a"],
        environ={"K": "V"},
    )

    text = str(err)
    assert text.startswith("error execing command [argv0='/stage/hello.1'")
    assert "argv=['/stage/hello.1', 'a']" in text
    assert "environ={'K': 'V'}" in text
    assert text.endswith(": Permission denied")


def test_cause_is_chained():
    cause = OSError("boom")

    err = StagingError("cannot copy executable", cause=cause)

    assert err.__cause__ is cause


def test_config_validation_error_is_value_error():
    err = ConfigValidationError("bad value", key="launch.mode", value="x")

    assert isinstance(err, ValueError)
    assert isinstance(err, GodoException)
    assert err.context == {"key": "launch.mode", "value": "x"}


def test_every_failure_is_terminal():
    assert not hasattr(GodoException("x"), "recoverable")
