# -*- coding: utf-8 -*-
"""Path filter: which directories are pruned and which files are excluded.

Matching is exact name equality against an entry's base name. Names that
contain a ``/`` are compared with the entry's path relative to the scan
root instead (``public/build``), still by plain equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

DEFAULT_OUTPUT_NAME = "project_snapshot.txt"

DEFAULT_IGNORED_ITEMS = (
    ".git",
    "node_modules",
    "vendor",
    "bower_components",
    "dist",
    "build",
    "out",
    "target",
    "public/build",
    "www",
    ".next",
    ".nuxt",
    ".svelte-kit",
    ".cache",
    ".venv",
    "venv",
    "env",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    "htmlcov",
    "coverage",
    "logs",
    "tmp",
    "temp",
    ".idea",
    ".vscode",
    ".project",
    ".settings",
    ".DS_Store",
    "Thumbs.db",
)


@dataclass(frozen=True)
class IgnoreSet:
    names: FrozenSet[str]
    # Artifact path relative to the scan root, None when it lives elsewhere.
    artifact_rel: Optional[str] = None

    def __contains__(self, name: str) -> bool:
        return name in self.names

    def sorted_names(self) -> list:
        return sorted(self.names)


def artifact_relpath(root: Path, output: Path) -> Optional[str]:
    """Posix path of ``output`` relative to ``root``, or None if outside it."""
    try:
        rel = output.resolve().relative_to(root.resolve())
    except ValueError:
        return None
    rel_posix = rel.as_posix()
    if rel_posix in ("", "."):
        return None
    return rel_posix


def build_ignore_set(root: Path, output: Path, extra: Iterable[str] = ()) -> IgnoreSet:
    names = set(DEFAULT_IGNORED_ITEMS)
    for item in extra:
        item = str(item).strip().strip("/")
        if item:
            names.add(item)

    artifact_rel = artifact_relpath(root, output)
    if artifact_rel is not None:
        names.add(output.name)
    return IgnoreSet(names=frozenset(names), artifact_rel=artifact_rel)


def should_prune(entry_name: str, ignore: IgnoreSet, rel_posix: str = "") -> bool:
    """True if a directory named ``entry_name`` must not be descended into."""
    if entry_name in ignore.names:
        return True
    # Slash names (public/build) compare against the root-relative path,
    # never against a base name.
    return bool(rel_posix) and rel_posix in ignore.names


def should_exclude(rel_posix: str, ignore: IgnoreSet) -> bool:
    """True if the file at ``rel_posix`` must not appear in the snapshot."""
    if ignore.artifact_rel is not None and rel_posix == ignore.artifact_rel:
        return True
    name = rel_posix.rsplit("/", 1)[-1]
    return name in ignore.names or rel_posix in ignore.names
