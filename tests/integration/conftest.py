"""Integration test fixtures: a real go command and a throwaway workspace."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def godo_env(tmp_path: Path) -> dict[str, str]:
    """Process environment with a private staging directory and GOPATH."""
    env = dict(os.environ)
    for var in [v for v in env if v.startswith("GODO_")]:
        del env[var]
    env["GOPATH"] = str(tmp_path / "gopath")
    if not any(env.get(v) for v in ("GOCACHE", "XDG_CACHE_HOME", "HOME")):
        env["GOCACHE"] = str(tmp_path / "gocache")
    env["GOFLAGS"] = "-mod=mod"
    env["GODO_STAGING__DIR"] = str(tmp_path / "stage")
    env["GODO_BUILD__TTY"] = "false"
    return env


@pytest.fixture
def run_godo(godo_env) -> Callable[..., subprocess.CompletedProcess]:
    """Run godo as a subprocess using the current Python interpreter."""

    def _run(*args: str, cwd: Path) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, "-m", "godo", *args],
            cwd=cwd,
            env=godo_env,
            capture_output=True,
            text=True,
            timeout=300,
        )

    return _run


@pytest.fixture
def module(tmp_path: Path) -> Callable[[str, dict[str, str]], Path]:
    """Create a Go module in tmp_path/<name> with the given files."""

    def _create(name: str, files: dict[str, str]) -> Path:
        root = tmp_path / name
        root.mkdir()
        (root / "go.mod").write_text(f"module example.com/{name}\n\ngo 1.18\n")
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _create
