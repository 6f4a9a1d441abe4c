"""
Unit tests for the argument splitter.

Tests cover:
- Heuristic and separator policies
- Defaulting the package spec to "."
- Usage errors (trailing "--", bare spec under the separator policy)
- Absolute specs rewritten relative to the working directory
- Reconstruction of the original argument vector
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from godo.core.exceptions import EXIT_USAGE, UsageError
from godo.core.models import ParsedInvocation
from godo.services.launch.args import ArgumentSplitter, is_help_request, relativize_spec


@pytest.fixture(params=["heuristic", "separator"])
def splitter(request, tmp_path: Path) -> ArgumentSplitter:
    """A splitter for each policy."""
    return ArgumentSplitter(policy=request.param, cwd=tmp_path)


class TestBothPolicies:
    """Behaviour shared by both split policies."""

    def test_no_arguments_builds_current_directory(self, splitter):
        parsed = splitter.split([])

        assert parsed.package_spec == "."
        assert parsed.spec_defaulted
        assert parsed.builder_flags == []
        assert parsed.program_args == []

    def test_only_flags_builds_current_directory(self, splitter):
        parsed = splitter.split(["-race", "-v"])

        assert parsed.package_spec == "."
        assert parsed.builder_flags == ["-race", "-v"]
        assert parsed.reconstruct() == ["-race", "-v"]

    def test_separator_splits_exactly(self, splitter):
        args = ["-x", "--", ".", "--flag", "value"]

        parsed = splitter.split(args)

        assert parsed.builder_flags == ["-x"]
        assert parsed.package_spec == "."
        assert parsed.program_args == ["--flag", "value"]
        assert parsed.used_separator
        assert parsed.reconstruct() == args

    def test_program_args_may_contain_separator(self, splitter):
        parsed = splitter.split(["--", "./cmd", "a", "--", "b"])

        assert parsed.package_spec == "./cmd"
        assert parsed.program_args == ["a", "--", "b"]

    def test_trailing_separator_is_usage_error(self, splitter):
        with pytest.raises(UsageError) as exc_info:
            splitter.split(["-x", "--"])

        assert exc_info.value.exit_code == EXIT_USAGE

    def test_lone_separator_is_usage_error(self, splitter):
        with pytest.raises(UsageError):
            splitter.split(["--"])

    def test_empty_spec_after_separator_is_usage_error(self, splitter):
        with pytest.raises(UsageError, match="empty package spec"):
            splitter.split(["--", ""])


class TestHeuristicPolicy:
    """The first non-flag token is the package spec."""

    @pytest.fixture
    def splitter(self, tmp_path: Path) -> ArgumentSplitter:
        return ArgumentSplitter(policy="heuristic", cwd=tmp_path)

    def test_first_non_flag_is_spec(self, splitter):
        parsed = splitter.split(["-race", "./cmd/tool", "-n", "3", "file"])

        assert parsed.builder_flags == ["-race"]
        assert parsed.package_spec == "./cmd/tool"
        assert parsed.program_args == ["-n", "3", "file"]
        assert not parsed.used_separator

    def test_import_path_spec(self, splitter):
        parsed = splitter.split(["example.com/tool", "arg"])

        assert parsed.package_spec == "example.com/tool"
        assert parsed.program_args == ["arg"]

    def test_reconstructs_original_vector(self, splitter):
        args = ["-a", "-b", "./x", "--", "y"]

        assert splitter.split(args).reconstruct() == args


class TestSeparatorPolicy:
    """Only "--" marks the package spec."""

    @pytest.fixture
    def splitter(self, tmp_path: Path) -> ArgumentSplitter:
        return ArgumentSplitter(policy="separator", cwd=tmp_path)

    def test_bare_spec_is_usage_error(self, splitter):
        with pytest.raises(UsageError, match='expected "--"'):
            splitter.split(["./cmd"])

    def test_non_flag_before_separator_is_usage_error(self, splitter):
        with pytest.raises(UsageError):
            splitter.split(["-o", "out", "--", "."])

    def test_spec_after_separator(self, splitter):
        parsed = splitter.split(["-race", "--", "./cmd", "arg"])

        assert parsed.builder_flags == ["-race"]
        assert parsed.package_spec == "./cmd"
        assert parsed.program_args == ["arg"]


class TestAbsoluteSpecs:
    """Absolute package specs are rewritten relative to the working directory."""

    def test_absolute_spec_below_cwd(self, tmp_path: Path):
        splitter = ArgumentSplitter(cwd=tmp_path)

        parsed = splitter.split([str(tmp_path / "cmd" / "tool"), "arg"])

        assert parsed.package_spec == "./cmd/tool"
        assert parsed.program_args == ["arg"]

    def test_absolute_spec_equal_to_cwd(self, tmp_path: Path):
        assert relativize_spec(str(tmp_path), tmp_path) == "."

    def test_absolute_spec_outside_cwd(self, tmp_path: Path):
        cwd = tmp_path / "a"
        cwd.mkdir()

        assert relativize_spec(str(tmp_path / "b"), cwd) == "../b"

    def test_relative_spec_unchanged(self, tmp_path: Path):
        assert relativize_spec("./cmd", tmp_path) == "./cmd"
        assert relativize_spec("example.com/x", tmp_path) == "example.com/x"


class TestParsedInvocation:
    """Model-level checks."""

    def test_defaulted_spec_cannot_carry_program_args(self):
        with pytest.raises(ValidationError):
            ParsedInvocation(program_args=["x"], spec_defaulted=True)

    def test_empty_spec_rejected(self):
        with pytest.raises(ValidationError):
            ParsedInvocation(package_spec="")

    def test_is_immutable(self):
        parsed = ParsedInvocation(package_spec="./x")

        with pytest.raises(ValidationError):
            parsed.package_spec = "./y"


class TestHelpRequest:
    @pytest.mark.parametrize("args", [["-h"], ["--help"]])
    def test_lone_help_flag(self, args):
        assert is_help_request(args)

    @pytest.mark.parametrize("args", [[], ["-h", "."], [".", "--help"], ["-x"]])
    def test_not_help(self, args):
        assert not is_help_request(args)


def test_unknown_policy_rejected():
    with pytest.raises(ValueError, match="Unknown split policy"):
        ArgumentSplitter(policy="guess")
