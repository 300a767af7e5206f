#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""project-snapshot CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

from project_snapshot import __version__
from project_snapshot.cli.config import SnapshotConfig, resolve_config
from project_snapshot.cli.logs import console, setup_logging
from project_snapshot.cli.reveal import reveal_file
from project_snapshot.cli.vcs import git_toplevel
from project_snapshot.core.classifier import PROBE_CHOICES, select_probe
from project_snapshot.core.errors import SnapshotError
from project_snapshot.core.filters import DEFAULT_OUTPUT_NAME, build_ignore_set
from project_snapshot.core.walker import SnapshotStats, write_snapshot

log = logging.getLogger("project_snapshot.cli")

EXIT_OK = 0
EXIT_FAIL = 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="project-snapshot",
        description="Flatten a project tree into one text snapshot (text inlined, binaries listed).",
        add_help=False,
    )
    p.add_argument(
        "-f", "--folder", metavar="PATH",
        help="Folder to scan. If omitted, the Git repo root is auto-detected.",
    )
    p.add_argument(
        "-w", "--write-to", metavar="PATH",
        help=f"Snapshot file path (absolute or relative). Defaults to <root>/{DEFAULT_OUTPUT_NAME}",
    )
    p.add_argument("-c", "--config", metavar="PATH", help="Optional settings.ini with a [SNAPSHOT] section")
    p.add_argument(
        "-i", "--ignore", metavar="NAME", action="append", default=[],
        help="Extra file/directory name to skip (repeatable)",
    )
    p.add_argument("--no-reveal", action="store_true", help="Do not open the file manager afterwards")
    p.add_argument("--probe", choices=PROBE_CHOICES, default=None, help="Media-type detector (default: auto)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-h", "--help", action="store_true", help="Show this help message and exit")
    return p


def _print_summary(stats: SnapshotStats) -> None:
    console.print(
        f"[bold green]Snapshot complete:[/bold green] {stats.output}\n"
        f"[dim]files={stats.total} text={stats.text} image={stats.image} "
        f"other={stats.other} read_errors={stats.read_errors}[/dim]"
    )


def run(cfg: SnapshotConfig) -> SnapshotStats:
    log.info("Using project root: %s", cfg.root)
    log.info("Will write snapshot to: %s", cfg.output)

    ignore = build_ignore_set(cfg.root, cfg.output, cfg.extra_ignores)
    if not cfg.output_inside_root:
        log.debug("Snapshot lives outside the root; no self-exclusion needed")
    log.info("Ignoring: %s", " ".join(ignore.sorted_names()))

    probe = select_probe(cfg.probe)
    log.debug("Media-type probe: %s", getattr(probe, "name", probe))

    log.info("Scanning files...")
    stats = write_snapshot(cfg.root, cfg.output, ignore, probe)
    log.info("Scanned %d files", stats.total)
    return stats


def main(
    argv: Optional[Iterable[str]] = None,
    root_finder: Callable[[], Path] = git_toplevel,
) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.help:
        parser.print_help(sys.stderr)
        return EXIT_FAIL

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        cfg = resolve_config(
            config_path=args.config,
            folder=args.folder,
            write_to=args.write_to,
            ignores=args.ignore,
            reveal=False if args.no_reveal else None,
            probe=args.probe,
            root_finder=root_finder,
        )
        stats = run(cfg)
    except SnapshotError as e:
        log.error("%s", e)
        return EXIT_FAIL

    if not args.quiet:
        _print_summary(stats)

    if cfg.reveal:
        log.info("Attempting to reveal '%s' in the default file manager...", cfg.output)
        reveal_file(cfg.output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
