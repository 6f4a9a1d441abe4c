"""
Package resolver service.

Turns a package spec into the source directory of a single command
package. Local specs are inspected directly; import paths are looked up
in the enclosing module first and then in the configured package roots,
in order.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from ...core.di import LazyService
from ...core.exceptions import ResolutionError, ResolutionKind
from ...core.interfaces.logger import ILogger
from ...core.models.launch import ResolvedPackage
from ..logging import NullLogger
from .source import SourceListing, command_name, find_module, is_local_spec, scan_directory


class PackageResolver:
    """
    Resolves package specs to command packages.

    Resolution only reads the filesystem, so resolving the same spec
    twice against an unchanged tree gives equal results.
    """

    logger = LazyService(ILogger, NullLogger)

    def __init__(
        self,
        roots: list[Path] | None = None,
        cwd: Path | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize package resolver.

        Args:
            roots: Package roots searched for import paths, in order
            cwd: Directory local specs are relative to (defaults to Path.cwd())
            logger: Logger for internal diagnostics
        """
        self._roots = list(roots or [])
        self._cwd = cwd
        self.logger = logger

    @property
    def cwd(self) -> Path:
        return self._cwd or Path.cwd()

    def resolve(self, spec: str) -> ResolvedPackage:
        """
        Resolve spec to a command package.

        Raises:
            ResolutionError: If spec is missing, empty, ambiguous or a library
        """
        package = self.inspect(spec)
        if not package.is_executable:
            raise ResolutionError(
                f"package {package.import_identifier!r} is not a command",
                kind=ResolutionKind.NOT_EXECUTABLE,
                spec=spec,
            )
        self.logger.debug(
            "Resolved %s -> %s (%s)", spec, package.source_dir, package.import_identifier
        )
        return package

    def inspect(self, spec: str) -> ResolvedPackage:
        """
        Resolve spec to a package without requiring it to be a command.

        Raises:
            ResolutionError: If spec is missing, empty or ambiguous
        """
        if is_local_spec(spec):
            directory = (self.cwd / spec).resolve()
            self.logger.debug("Local spec %s -> %s", spec, directory)
            return self._inspect_directory(spec, directory, is_local=True)
        return self._inspect_import_path(spec)

    def _inspect_import_path(self, spec: str) -> ResolvedPackage:
        module = find_module(self.cwd)
        if module is not None:
            module_root, module_path = module
            if spec == module_path or spec.startswith(module_path + "/"):
                rel = spec[len(module_path) :].lstrip("/")
                directory = module_root.joinpath(*PurePosixPath(rel).parts)
                self.logger.debug("Import path %s is in module %s", spec, module_path)
                return self._inspect_directory(spec, directory, is_local=False, identifier=spec)

        empty_match: Path | None = None
        for root in self._roots:
            directory = root.joinpath(*PurePosixPath(spec).parts)
            self.logger.debug("Checking package root %s for %s", root, spec)
            if not directory.is_dir():
                continue
            listing = self._scan(spec, directory)
            if listing.is_empty:
                empty_match = empty_match or directory
                continue
            return self._from_listing(spec, listing, is_local=False, identifier=spec)

        if empty_match is not None:
            raise ResolutionError(
                "no buildable Go source files",
                kind=ResolutionKind.NO_BUILDABLE_UNITS,
                spec=spec,
                directory=str(empty_match),
            )
        raise ResolutionError(
            f"cannot find package {spec!r} in any of: "
            + ", ".join(str(r) for r in self._roots),
            kind=ResolutionKind.NOT_FOUND,
            spec=spec,
        )

    def _inspect_directory(
        self,
        spec: str,
        directory: Path,
        *,
        is_local: bool,
        identifier: str | None = None,
    ) -> ResolvedPackage:
        if not directory.is_dir():
            raise ResolutionError(
                "directory not found",
                kind=ResolutionKind.NOT_FOUND,
                spec=spec,
                directory=str(directory),
            )
        listing = self._scan(spec, directory)
        if listing.is_empty:
            raise ResolutionError(
                "no buildable Go source files",
                kind=ResolutionKind.NO_BUILDABLE_UNITS,
                spec=spec,
                directory=str(directory),
            )
        return self._from_listing(spec, listing, is_local=is_local, identifier=identifier)

    def _scan(self, spec: str, directory: Path) -> SourceListing:
        try:
            return scan_directory(directory)
        except OSError as e:
            raise ResolutionError(
                f"cannot read package directory: {e}",
                kind=ResolutionKind.NOT_FOUND,
                spec=spec,
                directory=str(directory),
                cause=e,
            ) from e

    def _from_listing(self, spec, listing, *, is_local: bool, identifier: str | None):
        if len(listing.packages) > 1:
            found = ", ".join(
                f"{name} ({', '.join(files)})" for name, files in sorted(listing.packages.items())
            )
            raise ResolutionError(
                f"found more than one package: {found}",
                kind=ResolutionKind.AMBIGUOUS,
                spec=spec,
                directory=str(listing.directory),
            )
        identifier = identifier or self._import_identifier(listing.directory)
        return ResolvedPackage(
            source_dir=listing.directory,
            import_identifier=identifier,
            package_name=listing.names[0],
            command_name=command_name(identifier),
            is_local=is_local,
        )

    def _import_identifier(self, directory: Path) -> str:
        """Import path of a directory, or its absolute path when it has none."""
        module = find_module(directory)
        if module is not None:
            module_root, module_path = module
            rel = directory.relative_to(module_root).as_posix()
            return module_path if rel == "." else f"{module_path}/{rel}"
        for root in self._roots:
            try:
                return directory.relative_to(root.resolve()).as_posix()
            except ValueError:
                continue
        return directory.as_posix()
