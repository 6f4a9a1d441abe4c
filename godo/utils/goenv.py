"""
Go workspace conventions derived from an environment mapping.

All functions take the environment explicitly so they can be tested
without touching os.environ.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

STAGING_SUBDIR = "godo"


def exe_suffix(os_name: str | None = None) -> str:
    """Executable suffix including the dot ('.exe' on Windows, else '')."""
    return ".exe" if (os_name or os.name) == "nt" else ""


def gopath_entries(environ: Mapping[str, str]) -> list[Path]:
    """GOPATH entries in order, defaulting to ~/go like the go command."""
    raw = environ.get("GOPATH", "")
    entries = [Path(p).expanduser() for p in raw.split(os.pathsep) if p]
    if entries:
        return entries
    home = environ.get("HOME") or environ.get("USERPROFILE")
    base = Path(home) if home else Path.home()
    return [base / "go"]


def default_staging_dir(environ: Mapping[str, str]) -> Path:
    """$GOPATH/godo for the first GOPATH entry."""
    return gopath_entries(environ)[0] / STAGING_SUBDIR


def default_package_roots(environ: Mapping[str, str]) -> list[Path]:
    """Source directories searched for import paths: GOPATH src dirs, then GOROOT/src."""
    roots = [entry / "src" for entry in gopath_entries(environ)]
    goroot = environ.get("GOROOT")
    if goroot:
        roots.append(Path(goroot) / "src")
    return roots
