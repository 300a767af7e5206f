# -*- coding: utf-8 -*-
"""Reveal the snapshot in the desktop file manager.

Each platform/tool combination is one ``Revealer``. ``candidate_revealers``
returns them in preference order; ``reveal_file`` tries them until one
works. Everything here is best effort: failures become warnings.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from project_snapshot.core.errors import RevealError

log = logging.getLogger(__name__)


def _run(cmd: List[str]) -> None:
    try:
        r = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise RevealError(f"{cmd[0]}: {e}") from e
    if r.returncode != 0:
        detail = (r.stderr or "").strip() or f"exit {r.returncode}"
        raise RevealError(f"{' '.join(cmd)} failed: {detail}")


def _spawn(cmd: List[str], cwd: Optional[Path] = None) -> None:
    # GUI file managers block until the window closes; run them detached.
    try:
        subprocess.Popen(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise RevealError(f"{cmd[0]}: {e}") from e


class Revealer:
    name = "revealer"
    executable = ""
    selects_file = True

    def available(self) -> bool:
        return shutil.which(self.executable) is not None

    def reveal(self, path: Path) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FinderRevealer(Revealer):
    name = "Finder (open -R)"
    executable = "open"

    def reveal(self, path: Path) -> None:
        _run([self.executable, "-R", str(path)])


class FolderOpenRevealer(Revealer):
    name = "Finder (open folder)"
    executable = "open"
    selects_file = False

    def reveal(self, path: Path) -> None:
        _run([self.executable, str(path.parent)])


class ExplorerRevealer(Revealer):
    """``explorer.exe /select,<path>``; converts the path under WSL."""

    name = "Windows Explorer (/select)"
    executable = "explorer.exe"

    def __init__(self, wsl: bool = False):
        self.wsl = wsl

    def available(self) -> bool:
        if self.wsl and shutil.which("wslpath") is None:
            return False
        return super().available()

    def _windows_path(self, path: Path) -> str:
        if not self.wsl:
            return str(path)
        try:
            r = subprocess.run(["wslpath", "-w", str(path)], capture_output=True, text=True)
        except OSError as e:
            raise RevealError(f"wslpath: {e}") from e
        win = (r.stdout or "").strip()
        if r.returncode != 0 or not win:
            raise RevealError(f"wslpath could not convert {path}")
        return win

    def reveal(self, path: Path) -> None:
        # explorer.exe exits 1 even on success, so its status is not checked.
        _spawn([self.executable, f"/select,{self._windows_path(path)}"])


class ExplorerFolderRevealer(Revealer):
    name = "Windows Explorer (folder)"
    executable = "explorer.exe"
    selects_file = False

    def reveal(self, path: Path) -> None:
        # "." keeps the path valid on both sides of WSL.
        _spawn([self.executable, "."], cwd=path.parent)


class NautilusRevealer(Revealer):
    name = "Nautilus"
    executable = "nautilus"

    def reveal(self, path: Path) -> None:
        _spawn([self.executable, "--select", str(path)])


class DolphinRevealer(Revealer):
    name = "Dolphin"
    executable = "dolphin"

    def reveal(self, path: Path) -> None:
        _spawn([self.executable, "--select", str(path)])


class ThunarRevealer(Revealer):
    """Thunar selects the file when handed its path (not guaranteed)."""

    name = "Thunar"
    executable = "thunar"

    def reveal(self, path: Path) -> None:
        _spawn([self.executable, str(path)])


class XdgOpenRevealer(Revealer):
    name = "xdg-open (folder)"
    executable = "xdg-open"
    selects_file = False

    def reveal(self, path: Path) -> None:
        _run([self.executable, str(path.parent)])


def is_wsl(proc_version: Path = Path("/proc/version")) -> bool:
    try:
        text = proc_version.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    low = text.lower()
    return "microsoft" in low or "wsl" in low


def candidate_revealers(system: Optional[str] = None, wsl: Optional[bool] = None) -> List[Revealer]:
    system = system if system is not None else platform.system()
    if system == "Darwin":
        return [FinderRevealer(), FolderOpenRevealer()]
    if system == "Linux":
        if wsl if wsl is not None else is_wsl():
            return [ExplorerRevealer(wsl=True), ExplorerFolderRevealer()]
        return [NautilusRevealer(), DolphinRevealer(), ThunarRevealer(), XdgOpenRevealer()]
    if system == "Windows" or system.startswith(("CYGWIN", "MINGW", "MSYS")):
        return [ExplorerRevealer(), ExplorerFolderRevealer()]
    return []


def reveal_file(path: Path, revealers: Optional[Sequence[Revealer]] = None) -> bool:
    """Try each revealer in order; True once one of them succeeds."""
    if revealers is None:
        revealers = candidate_revealers()
        if not revealers:
            log.warning("Unsupported OS '%s'. Cannot automatically reveal the file.", platform.system())
            return False

    exists = path.is_file()
    if not exists:
        log.warning("Output file '%s' not found. Cannot select it; opening folder instead.", path)

    tried = 0
    for rv in revealers:
        if rv.selects_file and not exists:
            continue
        if not rv.available():
            log.debug("%s not available", rv.name)
            continue
        tried += 1
        try:
            rv.reveal(path)
        except RevealError as e:
            log.warning("Reveal via %s failed: %s", rv.name, e)
            continue
        log.info("Revealed '%s' via %s.", path, rv.name)
        return True

    if not tried:
        log.warning("No usable file manager found to reveal '%s'.", path)
    return False
