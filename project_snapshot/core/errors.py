# -*- coding: utf-8 -*-
"""Exception types shared by the core and the CLI."""

from __future__ import annotations


class SnapshotError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigError(SnapshotError):
    pass


class RootNotFoundError(SnapshotError):
    pass


class ClassificationError(SnapshotError):
    """The media-type probe could not run for one file."""


class RevealError(SnapshotError):
    pass


class OutputError(SnapshotError):
    """The snapshot artifact could not be created or written."""
