"""
Launch coordinator.

Runs one invocation through every stage, strictly in order:
split -> (fetch) -> resolve -> build -> stage -> launch. Each stage
raises on failure and nothing after it runs; there is no rollback.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from ...core.di import LazyService
from ...core.exceptions import ExecError
from ...core.interfaces.launch import (
    IArgumentSplitter,
    IArtifactStager,
    IBuildInvoker,
    ILauncher,
    IPackageResolver,
)
from ...core.interfaces.logger import ILogger
from ...core.models.launch import ExecPlan, LaunchFailed, LaunchOutcome
from ...core.settings import GodoSettings
from ...utils.goenv import default_package_roots, default_staging_dir
from ..logging import NullLogger
from ..packages.resolver import PackageResolver
from ..packages.source import is_local_spec
from .args import ArgumentSplitter
from .builder import BuildInvoker
from .environment import EnvironmentFilter
from .launcher import Launcher
from .stager import ArtifactStager


class LaunchCoordinator:
    """
    Coordinates a complete godo launch.

    Each stage is injected, so tests can replace any of them; use
    from_settings() to assemble the real pipeline.
    """

    logger = LazyService(ILogger, NullLogger)

    def __init__(
        self,
        splitter: IArgumentSplitter,
        resolver: IPackageResolver,
        env_filter: EnvironmentFilter,
        builder: IBuildInvoker,
        stager: IArtifactStager,
        launcher: ILauncher,
        environ: Mapping[str, str] | None = None,
        fetch: bool = False,
        logger: ILogger | None = None,
    ) -> None:
        self._splitter = splitter
        self._resolver = resolver
        self._env_filter = env_filter
        self._builder = builder
        self._stager = stager
        self._launcher = launcher
        self._environ = environ
        self._fetch = fetch
        self.logger = logger

    @classmethod
    def from_settings(
        cls,
        settings: GodoSettings,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> LaunchCoordinator:
        """Assemble the pipeline the settings describe."""
        env = os.environ if environ is None else environ
        staging_dir = (
            Path(settings.staging.dir).expanduser()
            if settings.staging.dir
            else default_staging_dir(env)
        )
        roots = (
            [Path(r).expanduser() for r in settings.resolve.roots]
            if settings.resolve.roots
            else default_package_roots(env)
        )
        return cls(
            splitter=ArgumentSplitter(policy=settings.launch.split_policy, cwd=cwd),
            resolver=PackageResolver(roots=roots, cwd=cwd),
            env_filter=EnvironmentFilter(
                strip=settings.env.strip,
                output_var=settings.env.output_var,
                strip_exec=settings.env.strip_exec,
            ),
            builder=BuildInvoker(go=settings.build.go, use_tty=settings.build.tty),
            stager=ArtifactStager(staging_dir, strategy=settings.staging.strategy),
            launcher=Launcher(mode=settings.launch.mode, announce=settings.launch.announce),
            environ=environ,
            fetch=settings.build.fetch,
        )

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def run(self, args: list[str]) -> LaunchOutcome:
        """
        Build and launch the package named by args.

        Returns only in spawn mode; in exec mode a successful launch
        never comes back.

        Raises:
            UsageError, ResolutionError, BuildError, StagingError, ExecError
        """
        parsed = self._splitter.split(args)
        environ = dict(self.environ)

        if self._fetch and not is_local_spec(parsed.package_spec):
            self.logger.debug("Fetching %s", parsed.package_spec)
            self._builder.fetch(
                parsed.package_spec,
                parsed.builder_flags,
                self._env_filter.fetch_environment(environ),
            )

        package = self._resolver.resolve(parsed.package_spec)
        staging_dir = self._stager.prepare()

        self._builder.invoke(
            package,
            parsed.builder_flags,
            staging_dir,
            self._env_filter.build_environment(environ, staging_dir),
        )
        artifact = self._stager.stage(package)

        plan = ExecPlan.for_artifact(
            artifact,
            parsed.program_args,
            self._env_filter.exec_environment(environ),
        )
        outcome = self._launcher.launch(plan, package.command_name)
        if isinstance(outcome, LaunchFailed):
            raise ExecError(
                outcome.reason,
                executable=str(plan.executable_path),
                argv=list(plan.argv),
                environ=dict(plan.environ),
            )
        return outcome
