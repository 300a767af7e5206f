# -*- coding: utf-8 -*-
"""Scan-root lookup through git."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from project_snapshot.core.errors import RootNotFoundError

log = logging.getLogger(__name__)


def git_toplevel(cwd: Optional[Path] = None) -> Path:
    """Absolute path of the enclosing git work tree.

    Raises RootNotFoundError when git is missing or ``cwd`` is not inside
    a repository.
    """
    try:
        r = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as e:
        raise RootNotFoundError(f"Not inside a Git repository (or git not installed): {e}") from e

    top = (r.stdout or "").strip()
    if r.returncode != 0 or not top:
        raise RootNotFoundError("Not inside a Git repository (or git not installed).")
    log.debug("git toplevel: %s", top)
    return Path(top).resolve()
