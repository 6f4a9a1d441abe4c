"""
Read-only inspection of Go source trees.

Reads just enough of a directory to decide which package it holds: the
package clause and build constraints of each buildable file, and the
module path of the enclosing go.mod. Nothing here runs the go command.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

GO_MOD = "go.mod"
_PACKAGE_RE = re.compile(r"^package\s+([A-Za-z_][A-Za-z0-9_]*)")
_MODULE_RE = re.compile(r'^module\s+("?)([^"\s]+)\1\s*(?://.*)?$')
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_MAJOR_VERSION_RE = re.compile(r"^v[1-9][0-9]*$")


def is_local_spec(spec: str) -> bool:
    """Whether spec names a filesystem path rather than an import path.

    Mirrors go's notion of a local import (".", "..", "./x", "../x")
    plus absolute paths.
    """
    if spec in (".", ".."):
        return True
    prefixes = ["./", "../"]
    if os.sep != "/":
        prefixes += [f".{os.sep}", f"..{os.sep}"]
    return spec.startswith(tuple(prefixes)) or os.path.isabs(spec)


def is_buildable_name(name: str) -> bool:
    """Go ignores test files and files starting with '_' or '.'."""
    return (
        name.endswith(".go")
        and not name.endswith("_test.go")
        and not name.startswith(("_", "."))
    )


def _constraint_is_ignore(line: str) -> bool:
    if line.startswith("//go:build"):
        return line[len("//go:build") :].strip() == "ignore"
    if line.startswith("// +build"):
        return "ignore" in line[len("// +build") :].split()
    return False


def read_package_clause(path: Path) -> str | None:
    """
    Return the package name declared by a Go file.

    Returns None for files excluded by an 'ignore' build constraint and
    for files without a package clause.
    """
    text = path.read_text(encoding="utf-8", errors="replace").lstrip("\ufeff")
    text = _BLOCK_COMMENT_RE.sub("", text)
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("//"):
            if _constraint_is_ignore(line):
                return None
            continue
        match = _PACKAGE_RE.match(line)
        return match.group(1) if match else None
    return None


@dataclass
class SourceListing:
    """Package names found in one directory, with the files declaring them."""

    directory: Path
    packages: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.packages

    @property
    def names(self) -> list[str]:
        return sorted(self.packages)


def scan_directory(directory: Path) -> SourceListing:
    """
    List the packages declared by buildable Go files in directory.

    Raises:
        OSError: If the directory cannot be read
    """
    listing = SourceListing(directory=directory)
    for entry in sorted(directory.iterdir()):
        if not entry.is_file() or not is_buildable_name(entry.name):
            continue
        name = read_package_clause(entry)
        if name is None:
            continue
        listing.packages.setdefault(name, []).append(entry.name)
    return listing


def read_module_path(go_mod: Path) -> str | None:
    """Module path from a go.mod 'module' directive."""
    for raw in go_mod.read_text(encoding="utf-8", errors="replace").splitlines():
        match = _MODULE_RE.match(raw.strip())
        if match:
            return match.group(2)
    return None


def find_module(start: Path) -> tuple[Path, str] | None:
    """
    Find the module enclosing start.

    Returns:
        (module root directory, module path), or None outside a module
    """
    for parent in [start, *start.parents]:
        go_mod = parent / GO_MOD
        if go_mod.is_file():
            module_path = read_module_path(go_mod)
            if module_path is None:
                return None
            return parent, module_path
    return None


def _is_major_version(element: str) -> bool:
    """Major version element go drops from binary names: v2 and up, never v0 or v1."""
    return element != "v1" and _MAJOR_VERSION_RE.match(element) is not None


def command_name(import_identifier: str) -> str:
    """
    Name 'go build -o dir/' gives the binary of a package.

    The last import path element, skipping a major version suffix of
    '/v2' or higher when there is an element before it.
    """
    parts = [p for p in re.split(r"[\\/]", import_identifier) if p]
    if not parts:
        return import_identifier
    if len(parts) > 1 and _is_major_version(parts[-1]):
        return parts[-2]
    return parts[-1]
