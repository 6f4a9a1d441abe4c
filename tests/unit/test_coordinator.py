"""
Unit tests for LaunchCoordinator.

Every stage after the splitter is mocked, so nothing is built or run.
Tests verify stage order, that failures stop the pipeline, and the
environments handed to each stage.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from godo.core.exceptions import (
    BuildError,
    ExecError,
    ResolutionError,
    ResolutionKind,
    UsageError,
)
from godo.core.models import LaunchFailed, Replaced, ResolvedPackage, StagedArtifact
from godo.core.settings import GodoSettings
from godo.services.launch import ArgumentSplitter, EnvironmentFilter, LaunchCoordinator


@pytest.fixture
def package(tmp_path: Path) -> ResolvedPackage:
    return ResolvedPackage(
        source_dir=tmp_path / "hello",
        import_identifier="example.com/hello",
        package_name="main",
        command_name="hello",
    )


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "stage"


@pytest.fixture
def stages(package, staging_dir):
    """Mocked stages attached to one parent so call order is recorded."""
    parent = MagicMock()
    parent.resolver.resolve.return_value = package
    parent.stager.prepare.return_value = staging_dir
    parent.stager.stage.return_value = StagedArtifact(
        final_path=staging_dir / "hello.42",
        stable_path=staging_dir / "hello",
        stable_name="hello",
        strategy="copy-aside",
    )
    parent.launcher.launch.return_value = Replaced(exit_code=0)
    return parent


def _coordinator(stages, tmp_path, environ, fetch=False, policy="heuristic"):
    return LaunchCoordinator(
        splitter=ArgumentSplitter(policy=policy, cwd=tmp_path),
        resolver=stages.resolver,
        env_filter=EnvironmentFilter(),
        builder=stages.builder,
        stager=stages.stager,
        launcher=stages.launcher,
        environ=environ,
        fetch=fetch,
    )


class TestPipeline:
    def test_stages_run_in_order(self, stages, tmp_path, isolated_env):
        _coordinator(stages, tmp_path, isolated_env).run(["-race", "--", ".", "a"])

        names = [c[0] for c in stages.mock_calls if not c[0].endswith("__")]
        assert names == [
            "resolver.resolve",
            "stager.prepare",
            "builder.invoke",
            "stager.stage",
            "launcher.launch",
        ]

    def test_build_gets_flags_and_pinned_environment(
        self, stages, package, staging_dir, tmp_path, isolated_env
    ):
        _coordinator(stages, tmp_path, isolated_env).run(["-race", "./hello"])

        pkg, flags, out_dir, env = stages.builder.invoke.call_args[0]
        assert pkg == package
        assert flags == ["-race"]
        assert out_dir == staging_dir
        assert env["GOBIN"] == str(staging_dir)
        assert "GODEBUG" not in env

    def test_exec_plan(self, stages, staging_dir, tmp_path, isolated_env):
        _coordinator(stages, tmp_path, isolated_env).run(["-x", "--", ".", "--flag", "value"])

        plan, command = stages.launcher.launch.call_args[0]
        exe = str(staging_dir / "hello.42")
        assert command == "hello"
        assert plan.argv == [exe, "--flag", "value"]
        assert plan.environ == isolated_env

    def test_returns_spawn_outcome(self, stages, tmp_path, isolated_env):
        stages.launcher.launch.return_value = Replaced(exit_code=7)

        outcome = _coordinator(stages, tmp_path, isolated_env).run(["."])

        assert outcome == Replaced(exit_code=7)

    def test_environment_not_mutated(self, stages, tmp_path, isolated_env):
        before = dict(isolated_env)

        _coordinator(stages, tmp_path, isolated_env).run(["."])

        assert isolated_env == before


class TestFailures:
    def test_usage_error_runs_nothing(self, stages, tmp_path, isolated_env):
        with pytest.raises(UsageError):
            _coordinator(stages, tmp_path, isolated_env).run(["-x", "--"])

        assert stages.mock_calls == []

    def test_library_is_never_built(self, stages, tmp_path, isolated_env):
        stages.resolver.resolve.side_effect = ResolutionError(
            "package 'x' is not a command", kind=ResolutionKind.NOT_EXECUTABLE
        )

        with pytest.raises(ResolutionError) as exc_info:
            _coordinator(stages, tmp_path, isolated_env).run(["./lib"])

        assert exc_info.value.exit_code == 2
        stages.builder.invoke.assert_not_called()
        stages.stager.prepare.assert_not_called()

    def test_build_failure_stops_before_staging(self, stages, tmp_path, isolated_env):
        stages.builder.invoke.side_effect = BuildError("error building command x")

        with pytest.raises(BuildError):
            _coordinator(stages, tmp_path, isolated_env).run(["."])

        stages.stager.stage.assert_not_called()
        stages.launcher.launch.assert_not_called()

    def test_launch_failure_becomes_exec_error(self, stages, staging_dir, tmp_path, isolated_env):
        stages.launcher.launch.return_value = LaunchFailed(reason="Permission denied")

        with pytest.raises(ExecError) as exc_info:
            _coordinator(stages, tmp_path, isolated_env).run([".", "arg"])

        err = exc_info.value
        assert err.exit_code == 1
        assert err.executable == str(staging_dir / "hello.42")
        assert err.argv == [str(staging_dir / "hello.42"), "arg"]
        assert "error execing command" in str(err)
        assert "Permission denied" in str(err)


class TestFetch:
    def test_fetches_import_path_first(self, stages, tmp_path, isolated_env):
        _coordinator(stages, tmp_path, isolated_env, fetch=True).run(["example.com/tool"])

        spec, flags, env = stages.builder.fetch.call_args[0]
        assert spec == "example.com/tool"
        assert env["GOBIN"] == os.devnull
        names = [c[0] for c in stages.mock_calls if not c[0].endswith("__")]
        assert names.index("builder.fetch") < names.index("resolver.resolve")

    def test_local_spec_not_fetched(self, stages, tmp_path, isolated_env):
        _coordinator(stages, tmp_path, isolated_env, fetch=True).run(["./tool"])

        stages.builder.fetch.assert_not_called()

    def test_disabled_by_default(self, stages, tmp_path, isolated_env):
        _coordinator(stages, tmp_path, isolated_env).run(["example.com/tool"])

        stages.builder.fetch.assert_not_called()


class TestFromSettings:
    def test_defaults_follow_gopath(self, tmp_path, isolated_env):
        settings = GodoSettings()

        coordinator = LaunchCoordinator.from_settings(settings, tmp_path, isolated_env)

        assert coordinator._stager.staging_dir == tmp_path / "gopath" / "godo"
        assert coordinator._resolver._roots == [
            tmp_path / "gopath" / "src",
            tmp_path / "goroot" / "src",
        ]

    def test_configured_values(self, tmp_path, isolated_env):
        settings = GodoSettings(
            launch={"split_policy": "separator", "mode": "spawn"},
            staging={"dir": str(tmp_path / "custom"), "strategy": "direct"},
            resolve={"roots": [str(tmp_path / "r")]},
        )

        coordinator = LaunchCoordinator.from_settings(settings, tmp_path, isolated_env)

        assert coordinator._splitter.policy == "separator"
        assert coordinator._stager.staging_dir == tmp_path / "custom"
        assert coordinator._stager.strategy == "direct"
        assert coordinator._resolver._roots == [tmp_path / "r"]
        assert coordinator._launcher.mode == "spawn"
