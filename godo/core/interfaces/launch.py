"""
Service protocol definitions for the launch pipeline.

These protocols define the contracts for each stage of a godo run, so
the coordinator can be tested with any stage swapped out.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from godo.core.models.launch import (
    ExecPlan,
    LaunchOutcome,
    ParsedInvocation,
    ResolvedPackage,
    StagedArtifact,
)


@runtime_checkable
class IArgumentSplitter(Protocol):
    """Protocol for splitting the raw argument vector."""

    def split(self, args: list[str]) -> ParsedInvocation:
        """Split args into builder flags, package spec and program args."""
        ...


@runtime_checkable
class IPackageResolver(Protocol):
    """Protocol for resolving a package spec to a command package."""

    def resolve(self, spec: str) -> ResolvedPackage:
        """Resolve spec, raising ResolutionError when it is not a command."""
        ...


@runtime_checkable
class IBuildInvoker(Protocol):
    """Protocol for running the external build toolchain."""

    def fetch(self, spec: str, builder_flags: list[str], env: Mapping[str, str]) -> None:
        """Download the package source before resolution."""
        ...

    def invoke(
        self,
        package: ResolvedPackage,
        builder_flags: list[str],
        staging_dir: Path,
        env: Mapping[str, str],
    ) -> None:
        """Build package into staging_dir, raising BuildError on failure."""
        ...


@runtime_checkable
class IArtifactStager(Protocol):
    """Protocol for staging built executables."""

    def prepare(self) -> Path:
        """Create the staging directory and return it."""
        ...

    def stage(self, package: ResolvedPackage) -> StagedArtifact:
        """Turn the freshly built executable into an exec-safe artifact."""
        ...


@runtime_checkable
class ILauncher(Protocol):
    """Protocol for the terminal process replacement."""

    def launch(self, plan: ExecPlan, command_name: str) -> LaunchOutcome:
        """Replace the current process; returns only on failure or in spawn mode."""
        ...
