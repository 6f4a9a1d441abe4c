"""
Command discovery for shell completion.

Lists the directories under a tree that hold a main package. This is an
auxiliary listing and is never used on the launch path.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from .source import is_local_spec, scan_directory


def _skip_dir(name: str) -> bool:
    return name.startswith(("_", ".")) or name == "testdata"


def walk_commands(root: Path) -> Iterator[Path]:
    """
    Yield every directory under root (root included) holding a main package.

    Directories starting with '_' or '.' and 'testdata' directories are
    pruned, except root itself. Unreadable directories are skipped.
    """
    if not root.is_dir():
        return
    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not _skip_dir(d))
        directory = Path(dirpath)
        try:
            listing = scan_directory(directory)
        except OSError:
            continue
        if "main" in listing.packages:
            yield directory


def _join_prefix(prefix: str, rel: str) -> str:
    if rel == ".":
        return prefix
    if not prefix:
        return rel
    if prefix.endswith("/"):
        return prefix + rel
    return f"{prefix}/{rel}"


def list_commands(partial: str, roots: list[Path], cwd: Path | None = None) -> list[str]:
    """
    Package specs of commands completing a partial spec.

    The partial spec is cut at its last '/'. A local prefix (such as
    './cmd') is walked directly and its results keep that prefix; an
    import path prefix is walked under every package root and reported
    relative to the root.
    """
    base = cwd or Path.cwd()
    cut = partial.rfind("/")
    prefix = partial[:cut] if cut != -1 else ""

    results: list[str] = []
    if prefix and is_local_spec(prefix):
        walk_root = base / prefix
        for directory in walk_commands(walk_root):
            rel = directory.relative_to(walk_root).as_posix()
            results.append(_join_prefix(prefix, rel))
        return results

    for root in roots:
        walk_root = root / prefix if prefix else root
        for directory in walk_commands(walk_root):
            results.append(directory.relative_to(root).as_posix())
    return results
