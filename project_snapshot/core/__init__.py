# -*- coding: utf-8 -*-
"""Walk / classify / render core (no CLI or OS glue)."""

from project_snapshot.core.classifier import MediaCategory, classify, select_probe
from project_snapshot.core.errors import SnapshotError
from project_snapshot.core.filters import DEFAULT_IGNORED_ITEMS, IgnoreSet, build_ignore_set
from project_snapshot.core.renderer import render
from project_snapshot.core.walker import FileEntry, SnapshotStats, walk, write_snapshot

__all__ = [
    "DEFAULT_IGNORED_ITEMS",
    "FileEntry",
    "IgnoreSet",
    "MediaCategory",
    "SnapshotError",
    "SnapshotStats",
    "build_ignore_set",
    "classify",
    "render",
    "select_probe",
    "walk",
    "write_snapshot",
]
