# -*- coding: utf-8 -*-
from __future__ import annotations

from pathlib import Path
from typing import List

from project_snapshot.cli import reveal as reveal_mod
from project_snapshot.cli.reveal import (
    DolphinRevealer,
    ExplorerFolderRevealer,
    ExplorerRevealer,
    FinderRevealer,
    FolderOpenRevealer,
    NautilusRevealer,
    Revealer,
    ThunarRevealer,
    XdgOpenRevealer,
    candidate_revealers,
    is_wsl,
    reveal_file,
)
from project_snapshot.core.errors import RevealError


class FakeRevealer(Revealer):
    def __init__(self, name: str, calls: List[str], ok: bool = True, present: bool = True, selects: bool = True):
        self.name = name
        self.calls = calls
        self.ok = ok
        self.present = present
        self.selects_file = selects

    def available(self) -> bool:
        return self.present

    def reveal(self, path: Path) -> None:
        self.calls.append(self.name)
        if not self.ok:
            raise RevealError(f"{self.name} broke")


def _types(revealers):
    return [type(r) for r in revealers]


def test_candidates_per_platform():
    assert _types(candidate_revealers("Darwin")) == [FinderRevealer, FolderOpenRevealer]
    assert _types(candidate_revealers("Linux", wsl=False)) == [
        NautilusRevealer,
        DolphinRevealer,
        ThunarRevealer,
        XdgOpenRevealer,
    ]
    wsl = candidate_revealers("Linux", wsl=True)
    assert _types(wsl) == [ExplorerRevealer, ExplorerFolderRevealer]
    assert wsl[0].wsl is True
    assert _types(candidate_revealers("MINGW64_NT-10.0")) == [ExplorerRevealer, ExplorerFolderRevealer]
    assert candidate_revealers("Plan9") == []


def test_falls_back_in_order(tmp_path: Path):
    target = tmp_path / "snap.txt"
    target.write_text("x", encoding="utf-8")
    calls: List[str] = []
    chain = [
        FakeRevealer("missing", calls, present=False),
        FakeRevealer("broken", calls, ok=False),
        FakeRevealer("good", calls),
        FakeRevealer("never", calls),
    ]
    assert reveal_file(target, chain) is True
    assert calls == ["broken", "good"]


def test_missing_file_only_opens_folder(tmp_path: Path):
    calls: List[str] = []
    chain = [FakeRevealer("select", calls), FakeRevealer("folder", calls, selects=False)]
    assert reveal_file(tmp_path / "nope.txt", chain) is True
    assert calls == ["folder"]


def test_all_failures_return_false(tmp_path: Path):
    target = tmp_path / "snap.txt"
    target.write_text("x", encoding="utf-8")
    calls: List[str] = []
    assert reveal_file(target, [FakeRevealer("a", calls, ok=False)]) is False
    assert reveal_file(target, []) is False


def test_unsupported_os_returns_false(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(reveal_mod.platform, "system", lambda: "Plan9")
    assert reveal_file(tmp_path / "x.txt") is False


def test_run_failure_becomes_reveal_error(tmp_path: Path, monkeypatch):
    class Result:
        returncode = 1
        stderr = "no display"

    monkeypatch.setattr(reveal_mod.subprocess, "run", lambda *a, **k: Result())
    rv = XdgOpenRevealer()
    try:
        rv.reveal(tmp_path / "snap.txt")
    except RevealError as e:
        assert "no display" in str(e)
    else:
        raise AssertionError("expected RevealError")


def test_missing_executable_becomes_reveal_error(tmp_path: Path, monkeypatch):
    def boom(*a, **k):
        raise FileNotFoundError("nautilus")

    monkeypatch.setattr(reveal_mod.subprocess, "Popen", boom)
    target = tmp_path / "snap.txt"
    target.write_text("x", encoding="utf-8")
    rv = NautilusRevealer()
    monkeypatch.setattr(rv, "available", lambda: True)
    assert reveal_file(target, [rv]) is False


def test_is_wsl(tmp_path: Path):
    v = tmp_path / "version"
    v.write_text("Linux version 5.15.90.1-microsoft-standard-WSL2\n", encoding="utf-8")
    assert is_wsl(v)
    v.write_text("Linux version 6.1.0-18-amd64 (debian)\n", encoding="utf-8")
    assert not is_wsl(v)
    assert not is_wsl(tmp_path / "absent")
