# -*- coding: utf-8 -*-
"""Content-sniffing classifier.

A probe maps a file path to a media type string such as ``text/plain``.
Two probes ship with the package:

- ``FileCommandProbe`` asks the ``file`` utility (``file --mime-type -b``).
- ``BuiltinSniffer`` checks a small magic-byte table, then falls back to a
  text/binary heuristic on the first block of the file.

``classify`` turns the media type into a ``MediaCategory``. A probe that
cannot run never aborts the walk: the file is reported as ``unknown/error``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from project_snapshot.core.errors import ClassificationError, ConfigError

log = logging.getLogger(__name__)

TEXT = "text"
IMAGE = "image"
OTHER = "other"

UNKNOWN_MEDIA_TYPE = "unknown/error"
EMPTY_MEDIA_TYPE = "inode/x-empty"

SNIFF_BYTES = 2048

Probe = Callable[[Path], str]


@dataclass(frozen=True)
class MediaCategory:
    kind: str
    media_type: str

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    @property
    def is_image(self) -> bool:
        return self.kind == IMAGE

    @classmethod
    def from_media_type(cls, media_type: str) -> "MediaCategory":
        if media_type.startswith("text/"):
            return cls(TEXT, media_type)
        if media_type.startswith("image/"):
            return cls(IMAGE, media_type)
        return cls(OTHER, media_type)


def _looks_like_media_type(value: str) -> bool:
    major, sep, minor = value.partition("/")
    return bool(sep and major and minor) and " " not in value


class FileCommandProbe:
    name = "file"

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable or shutil.which("file") or "file"

    def __call__(self, path: Path) -> str:
        try:
            r = subprocess.run(
                [self.executable, "--mime-type", "-b", str(path)],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ClassificationError(f"cannot run {self.executable}: {e}") from e
        out = (r.stdout or "").strip()
        if r.returncode != 0 or not _looks_like_media_type(out):
            detail = (r.stderr or out or f"exit {r.returncode}").strip()
            raise ClassificationError(f"file probe failed for {path}: {detail}")
        return out

    @staticmethod
    def available() -> bool:
        return shutil.which("file") is not None


# (offset, signature, media type); first match wins.
MAGIC_SIGNATURES: List[Tuple[int, bytes, str]] = [
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (0, b"II*\x00", "image/tiff"),
    (0, b"MM\x00*", "image/tiff"),
    (0, b"\x00\x00\x01\x00", "image/vnd.microsoft.icon"),
    (0, b"%PDF-", "application/pdf"),
    (0, b"PK\x03\x04", "application/zip"),
    (0, b"PK\x05\x06", "application/zip"),
    (0, b"\x1f\x8b", "application/gzip"),
    (0, b"BZh", "application/x-bzip2"),
    (0, b"\xfd7zXZ\x00", "application/x-xz"),
    (0, b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (0, b"\x7fELF", "application/x-executable"),
    (0, b"SQLite format 3\x00", "application/vnd.sqlite3"),
    (0, b"\x00asm", "application/wasm"),
]

# UTF-16/UTF-32 text carries NUL bytes, so a BOM is checked before the NUL test.
TEXT_BOMS = (b"\xff\xfe", b"\xfe\xff")

_TEXT_CHARS = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))


def _is_probably_binary(chunk: bytes) -> bool:
    if b"\x00" in chunk:
        return True
    nontext = chunk.translate(None, _TEXT_CHARS)
    return len(nontext) / max(len(chunk), 1) > 0.30


class BuiltinSniffer:
    name = "builtin"

    def __call__(self, path: Path) -> str:
        try:
            with open(path, "rb") as f:
                chunk = f.read(SNIFF_BYTES)
        except OSError as e:
            raise ClassificationError(f"cannot read {path}: {e}") from e

        if not chunk:
            return EMPTY_MEDIA_TYPE
        # BMP and WEBP need more than a plain prefix check.
        if chunk[:2] == b"BM" and chunk[6:10] == b"\x00\x00\x00\x00":
            return "image/bmp"
        if chunk[:4] == b"RIFF" and chunk[8:12] == b"WEBP":
            return "image/webp"
        for offset, sig, media_type in MAGIC_SIGNATURES:
            if chunk[offset:offset + len(sig)] == sig:
                return media_type
        if chunk.startswith(TEXT_BOMS):
            return "text/plain"
        if _is_probably_binary(chunk):
            return "application/octet-stream"
        return "text/plain"

    @staticmethod
    def available() -> bool:
        return True


PROBE_CHOICES = ("auto", "file", "builtin")


def select_probe(kind: str = "auto") -> Probe:
    if kind == "file":
        return FileCommandProbe()
    if kind == "builtin":
        return BuiltinSniffer()
    if kind != "auto":
        raise ConfigError(f"Unknown probe: {kind} (choose from {', '.join(PROBE_CHOICES)})")
    if FileCommandProbe.available():
        return FileCommandProbe()
    log.debug("'file' not found on PATH, using builtin sniffer")
    return BuiltinSniffer()


def classify(path: Path, probe: Probe) -> MediaCategory:
    try:
        media_type = probe(path)
    except ClassificationError as e:
        log.debug("classification failed: %s", e)
        media_type = UNKNOWN_MEDIA_TYPE
    return MediaCategory.from_media_type(media_type)
