# -*- coding: utf-8 -*-
"""Tree walk and snapshot writer.

The walk is depth-first and pre-order with siblings sorted by name, so an
unchanged tree always produces the same sequence of blocks. Only regular
files are emitted; symlinks and special files are skipped and symlinked
directories are never followed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from project_snapshot.core.classifier import IMAGE, TEXT, MediaCategory, Probe, classify
from project_snapshot.core.errors import OutputError
from project_snapshot.core.filters import IgnoreSet, should_exclude, should_prune
from project_snapshot.core.renderer import TEXT_ENCODING, TEXT_ERRORS, header_line, render_with_status

log = logging.getLogger(__name__)


@dataclass
class FileEntry:
    rel_posix: str
    abs_path: Path
    category: Optional[MediaCategory] = None


@dataclass
class SnapshotStats:
    output: Path
    total: int = 0
    text: int = 0
    image: int = 0
    other: int = 0
    read_errors: int = 0
    skipped_dirs: List[str] = field(default_factory=list)

    def count(self, category: MediaCategory) -> None:
        self.total += 1
        if category.kind == TEXT:
            self.text += 1
        elif category.kind == IMAGE:
            self.image += 1
        else:
            self.other += 1


def _sorted_entries(dir_path: Path) -> List[os.DirEntry]:
    with os.scandir(dir_path) as it:
        return sorted(it, key=lambda e: e.name)


def walk(
    root: Path,
    ignore: IgnoreSet,
    emit: Callable[[FileEntry], None],
    on_error: Optional[Callable[[str, OSError], None]] = None,
) -> int:
    """Feed every surviving regular file under ``root`` to ``emit``.

    Returns the number of files emitted. Directories that cannot be listed
    are reported through ``on_error`` (or logged) and skipped.
    """
    total = 0

    def _visit(dir_path: Path, rel_dir: str) -> None:
        nonlocal total
        try:
            entries = _sorted_entries(dir_path)
        except OSError as e:
            if on_error is not None:
                on_error(rel_dir or ".", e)
            else:
                log.warning("Cannot list %s: %s", rel_dir or ".", e)
            return

        for entry in entries:
            rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            try:
                if entry.is_symlink():
                    continue
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue

            if is_dir:
                if should_prune(entry.name, ignore, rel):
                    log.debug("prune %s", rel)
                    continue
                _visit(Path(entry.path), rel)
            elif is_file:
                if should_exclude(rel, ignore):
                    log.debug("exclude %s", rel)
                    continue
                emit(FileEntry(rel_posix=rel, abs_path=Path(entry.path)))
                total += 1

    _visit(root, "")
    return total


def _timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now().astimezone()
    return now.isoformat(timespec="seconds")


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_snapshot(
    root: Path,
    output: Path,
    ignore: IgnoreSet,
    probe: Probe,
    now: Optional[datetime] = None,
) -> SnapshotStats:
    """Truncate ``output`` and write the header plus one block per file."""
    stats = SnapshotStats(output=output)

    def _on_dir_error(rel: str, e: OSError) -> None:
        log.warning("Skipping unreadable directory %s: %s", rel, e)
        stats.skipped_dirs.append(rel)

    try:
        _ensure_parent(output)
        with open(output, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as out:
            out.write(header_line(_timestamp(now)))

            def _emit(entry: FileEntry) -> None:
                entry.category = classify(entry.abs_path, probe)
                block, ok = render_with_status(entry.rel_posix, entry.abs_path, entry.category)
                if not ok:
                    log.warning("Error reading %s", entry.rel_posix)
                    stats.read_errors += 1
                out.write(block)
                stats.count(entry.category)

            walk(root, ignore, _emit, on_error=_on_dir_error)
    except OSError as e:
        raise OutputError(f"Cannot write snapshot to {output}: {e}") from e
    return stats
