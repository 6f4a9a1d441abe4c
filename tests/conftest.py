"""
Shared pytest fixtures for godo tests.

- reset_godo: Resets the service container and bootstrap state around each test
- go_tree: Helper to write Go source trees (packages, modules) under tmp_path
- isolated_env: An environment mapping with GOPATH/GOROOT pointing into tmp_path
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from godo.core.bootstrap import reset


@pytest.fixture(autouse=True)
def reset_godo():
    """Give each test a fresh container."""
    reset()
    yield
    reset()


@pytest.fixture
def go_tree(tmp_path: Path) -> Callable[..., Path]:
    """
    Write Go source files below tmp_path.

    Usage:
        go_tree("cmd/hello", {"main.go": "package main\\n"})
        go_tree(".", {"go.mod": "module example.com/m\\n"})

    Returns:
        Function creating the directory and files and returning the directory
    """

    def _write(rel: str, files: dict[str, str]) -> Path:
        directory = tmp_path / rel
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content)
        return directory

    return _write


@pytest.fixture
def isolated_env(tmp_path: Path) -> dict[str, str]:
    """Environment with a private GOPATH and GOROOT."""
    return {
        "PATH": "/usr/bin:/bin",
        "HOME": str(tmp_path / "home"),
        "GOPATH": str(tmp_path / "gopath"),
        "GOROOT": str(tmp_path / "goroot"),
        "GODEBUG": "gctrace=1",
        "GOBIN": "/somewhere/else",
    }
