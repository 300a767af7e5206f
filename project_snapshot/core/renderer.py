# -*- coding: utf-8 -*-
"""Render one classified file as a block of the snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from project_snapshot.core.classifier import MediaCategory

# Bytes that are not valid UTF-8 survive the round trip through str.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def header_line(timestamp: str) -> str:
    return f"# AI Context Reference: Project snapshot generated on {timestamp}\n"


def start_marker(rel_posix: str) -> str:
    return f"--- START FILE: {rel_posix} ---\n"


def end_marker(rel_posix: str) -> str:
    return f"--- END FILE: {rel_posix} ---\n"


def image_marker(rel_posix: str) -> str:
    return f"--- IMAGE FILE: {rel_posix} ---\n"


def other_marker(rel_posix: str, media_type: str) -> str:
    return f"--- OTHER FILE ({media_type}): {rel_posix} ---\n"


def read_error_line(rel_posix: str) -> str:
    return f"[Error reading {rel_posix}]\n"


def read_text_verbatim(path: Path) -> str:
    return path.read_bytes().decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def render_text(rel_posix: str, path: Path) -> Tuple[str, bool]:
    """Return the START/END block and whether the read succeeded."""
    ok = True
    try:
        body = read_text_verbatim(path)
    except OSError:
        body = read_error_line(rel_posix)
        ok = False
    if body and not body.endswith("\n"):
        body += "\n"
    return start_marker(rel_posix) + body + end_marker(rel_posix) + "\n", ok


def render_with_status(rel_posix: str, path: Path, category: MediaCategory) -> Tuple[str, bool]:
    if category.is_text:
        return render_text(rel_posix, path)
    if category.is_image:
        return image_marker(rel_posix) + "\n", True
    return other_marker(rel_posix, category.media_type) + "\n", True


def render(rel_posix: str, path: Path, category: MediaCategory) -> str:
    block, _ = render_with_status(rel_posix, path, category)
    return block
