"""
Launch domain models.

Provides Pydantic models for the values that flow through one godo
invocation: split arguments, the resolved package, the staged artifact
and the final exec plan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import Field, computed_field, model_validator

from .base import ImmutableModel
from .config import StagingStrategy

SEPARATOR = "--"
DEFAULT_PACKAGE_SPEC = "."


class ParsedInvocation(ImmutableModel):
    """Arguments split into builder flags, package spec and program args."""

    builder_flags: list[str] = Field(default_factory=list)
    package_spec: Annotated[str, Field(min_length=1)] = DEFAULT_PACKAGE_SPEC
    program_args: list[str] = Field(default_factory=list)
    used_separator: bool = False
    spec_defaulted: bool = False

    @model_validator(mode="after")
    def validate_defaulted_spec(self) -> ParsedInvocation:
        """A defaulted spec never has program args or a separator."""
        if self.spec_defaulted and (self.program_args or self.used_separator):
            raise ValueError("defaulted package spec cannot carry program args")
        return self

    def reconstruct(self) -> list[str]:
        """Rejoin the parts into the argument vector they were split from.

        When the package spec was defaulted, this is the flag prefix only.
        """
        args = list(self.builder_flags)
        if self.used_separator:
            args.append(SEPARATOR)
        if not self.spec_defaulted:
            args.append(self.package_spec)
        args.extend(self.program_args)
        return args


class ResolvedPackage(ImmutableModel):
    """A package spec resolved to a source directory on disk."""

    source_dir: Path
    import_identifier: Annotated[str, Field(min_length=1)]
    package_name: Annotated[str, Field(min_length=1)]
    command_name: Annotated[str, Field(min_length=1)]
    is_local: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_executable(self) -> bool:
        """Only package main builds into a program."""
        return self.package_name == "main"


class StagedArtifact(ImmutableModel):
    """A built executable ready to be exec'd."""

    final_path: Path
    stable_path: Path
    stable_name: Annotated[str, Field(min_length=1)]
    strategy: StagingStrategy

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_private(self) -> bool:
        """Whether final_path belongs to this invocation alone."""
        return self.final_path != self.stable_path


class ExecPlan(ImmutableModel):
    """Everything needed to replace the current process image."""

    executable_path: Path
    argv: Annotated[list[str], Field(min_length=1)]
    environ: dict[str, str]

    @model_validator(mode="after")
    def validate_argv0(self) -> ExecPlan:
        """argv[0] is the executable path."""
        if self.argv[0] != str(self.executable_path):
            raise ValueError("argv[0] must be the executable path")
        return self

    @classmethod
    def for_artifact(
        cls,
        artifact: StagedArtifact,
        program_args: list[str],
        environ: dict[str, str],
    ) -> ExecPlan:
        """Build the plan that runs a staged artifact with program args."""
        path = artifact.final_path
        return cls(executable_path=path, argv=[str(path), *program_args], environ=environ)


class Replaced(ImmutableModel):
    """The process image was replaced.

    With a real exec this value is never observed, since control does not
    return. The spawn-and-wait fallback constructs it with the child's
    exit status.
    """

    kind: Literal["replaced"] = "replaced"
    exit_code: int | None = None
    signal: int | None = None


class LaunchFailed(ImmutableModel):
    """The process image could not be replaced."""

    kind: Literal["failed"] = "failed"
    reason: Annotated[str, Field(min_length=1)]


LaunchOutcome = Union[Replaced, LaunchFailed]
