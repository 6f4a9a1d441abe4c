"""
Artifact staging service.

The build always writes to a stable, package-named file in the staging
directory. With the copy-aside strategy that file is only a cache: each
invocation copies it to a name suffixed with its own process id and
execs the copy, so a later rebuild of the same package never touches a
file another invocation is running. The direct strategy execs the
stable file itself and gives no such guarantee.
"""

from __future__ import annotations

import contextlib
import os
import shutil
from pathlib import Path

from ...core.di import LazyService
from ...core.exceptions import StagingError
from ...core.interfaces.logger import ILogger
from ...core.models.config import StagingStrategy
from ...core.models.launch import ResolvedPackage, StagedArtifact
from ...utils.goenv import exe_suffix
from ..logging import NullLogger

DIR_MODE = 0o755
EXE_MODE = 0o755


class ArtifactStager:
    """
    Creates the staging directory and hands out exec-safe artifacts.

    Args:
        staging_dir: Directory the build writes executables to
        strategy: 'copy-aside' (private copy per process) or 'direct'
        pid: Process id used for private copies (defaults to os.getpid())
        suffix: Executable suffix (defaults to the platform's)
        logger: Logger for internal diagnostics
    """

    logger = LazyService(ILogger, NullLogger)

    def __init__(
        self,
        staging_dir: Path,
        strategy: StagingStrategy = "copy-aside",
        pid: int | None = None,
        suffix: str | None = None,
        logger: ILogger | None = None,
    ) -> None:
        if strategy not in ("copy-aside", "direct"):
            raise ValueError(f"Unknown staging strategy: {strategy}")
        self._staging_dir = staging_dir
        self._strategy = strategy
        self._pid = pid
        self._suffix = exe_suffix() if suffix is None else suffix
        self.logger = logger

    @property
    def staging_dir(self) -> Path:
        return self._staging_dir

    @property
    def strategy(self) -> StagingStrategy:
        return self._strategy

    def prepare(self) -> Path:
        """
        Create the staging directory and its parents.

        Raises:
            StagingError: If the directory cannot be created
        """
        try:
            self._staging_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise StagingError(
                f"cannot create staging directory: {e}", path=str(self._staging_dir), cause=e
            ) from e
        return self._staging_dir

    def stable_name(self, package: ResolvedPackage) -> str:
        """File name the build gives the package's executable."""
        return package.command_name + self._suffix

    def private_name(self, package: ResolvedPackage) -> str:
        """File name of this process's own copy."""
        pid = self._pid if self._pid is not None else os.getpid()
        return f"{package.command_name}.{pid}{self._suffix}"

    def stage(self, package: ResolvedPackage) -> StagedArtifact:
        """
        Produce the artifact to exec for a freshly built package.

        Raises:
            StagingError: If the build output is missing or cannot be copied
        """
        stable_name = self.stable_name(package)
        stable_path = self._staging_dir / stable_name
        if not stable_path.is_file():
            raise StagingError("build produced no executable", path=str(stable_path))

        final_path = stable_path
        if self._strategy == "copy-aside":
            final_path = self._staging_dir / self.private_name(package)
            self._copy_aside(stable_path, final_path)

        self.logger.debug("Staged %s as %s (%s)", stable_path, final_path, self._strategy)
        return StagedArtifact(
            final_path=final_path,
            stable_path=stable_path,
            stable_name=stable_name,
            strategy=self._strategy,
        )

    def _copy_aside(self, src: Path, dst: Path) -> None:
        """Copy src to dst through a temporary file renamed into place."""
        tmp = dst.with_name(f".{dst.name}.tmp")
        try:
            shutil.copyfile(src, tmp)
            os.chmod(tmp, EXE_MODE)
            os.replace(tmp, dst)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StagingError(f"cannot copy executable: {e}", path=str(dst), cause=e) from e
