# -*- coding: utf-8 -*-
from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from project_snapshot.core.classifier import BuiltinSniffer

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 17


@pytest.fixture
def sniffer() -> BuiltinSniffer:
    return BuiltinSniffer()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Small project tree: a text file, an image, a blob and a .git dir."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "a.txt").write_text("hello", encoding="utf-8")
    (root / "assets").mkdir()
    (root / "assets" / "logo.png").write_bytes(PNG_BYTES)
    (root / "lib.bin").write_bytes(bytes(range(256)))
    return root


def make_zip(path: Path) -> Path:
    with zipfile.ZipFile(path, "w") as z:
        z.writestr("inner.txt", "zipped")
    return path
