# -*- coding: utf-8 -*-
"""Run configuration: CLI flags > environment > optional settings.ini."""

from __future__ import annotations

import configparser
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from project_snapshot.cli.vcs import git_toplevel
from project_snapshot.core.classifier import PROBE_CHOICES
from project_snapshot.core.errors import ConfigError
from project_snapshot.core.filters import DEFAULT_OUTPUT_NAME

SECTION = "SNAPSHOT"

ENV_FOLDER = "PROJECT_SNAPSHOT_FOLDER"
ENV_WRITE_TO = "PROJECT_SNAPSHOT_WRITE_TO"
ENV_CONFIG = "PROJECT_SNAPSHOT_CONFIG"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SnapshotConfig:
    root: Path
    output: Path
    extra_ignores: Tuple[str, ...] = ()
    reveal: bool = True
    probe: str = "auto"

    @property
    def output_inside_root(self) -> bool:
        try:
            self.output.relative_to(self.root)
        except ValueError:
            return False
        return True


def _expand(val: Optional[str]) -> Optional[str]:
    if not val:
        return None
    return os.path.expanduser(val.strip())


def _cfg_get(cfg: configparser.ConfigParser, key: str) -> Optional[str]:
    val = cfg.get(SECTION, key, fallback="").strip()
    return val or None


def _split_names(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(p.strip() for p in re.split(r"[,\n]", raw) if p.strip())


def _parse_bool(raw: str, key: str) -> bool:
    low = raw.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ConfigError(f"{key}: expected a boolean, got {raw!r}")


def load_ini(path: Path) -> configparser.ConfigParser:
    cfg = configparser.ConfigParser()
    if not path.is_file():
        raise ConfigError(f"Missing config: {path}")
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    return cfg


def resolve_root(folder: Optional[str], root_finder: Callable[[], Path] = git_toplevel) -> Path:
    if folder:
        p = Path(folder).expanduser()
        if not p.is_dir():
            raise ConfigError(f"'{folder}' is not a directory.")
        return p.resolve()
    return root_finder()


def resolve_output(root: Path, write_to: Optional[str]) -> Path:
    """Relative ``write_to`` paths are taken from the scan root, not the cwd."""
    if write_to:
        p = Path(write_to).expanduser()
        if not p.is_absolute():
            p = root / p
        return p.resolve()
    return root / DEFAULT_OUTPUT_NAME


def resolve_config(
    *,
    config_path: Optional[str] = None,
    folder: Optional[str] = None,
    write_to: Optional[str] = None,
    ignores: Iterable[str] = (),
    reveal: Optional[bool] = None,
    probe: Optional[str] = None,
    root_finder: Callable[[], Path] = git_toplevel,
) -> SnapshotConfig:
    config_path = config_path or os.environ.get(ENV_CONFIG)
    cfg = load_ini(Path(config_path).expanduser()) if config_path else configparser.ConfigParser()

    folder = folder or _expand(os.environ.get(ENV_FOLDER)) or _expand(_cfg_get(cfg, "FOLDER"))
    write_to = write_to or _expand(os.environ.get(ENV_WRITE_TO)) or _expand(_cfg_get(cfg, "WRITE_TO"))

    if reveal is None:
        raw = _cfg_get(cfg, "REVEAL")
        reveal = _parse_bool(raw, "REVEAL") if raw else True

    probe = probe or _cfg_get(cfg, "PROBE") or "auto"
    if probe not in PROBE_CHOICES:
        raise ConfigError(f"Unknown probe: {probe} (choose from {', '.join(PROBE_CHOICES)})")

    extra = _split_names(_cfg_get(cfg, "IGNORE")) + tuple(ignores)

    root = resolve_root(folder, root_finder)
    return SnapshotConfig(
        root=root,
        output=resolve_output(root, write_to),
        extra_ignores=extra,
        reveal=bool(reveal),
        probe=probe,
    )
