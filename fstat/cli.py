#!/usr/bin/env python
"""
Main CLI entry point for fstat.

Reads a list of paths (FILE, stdin, or --glob) and prints their modification
time, size and type as a table, CSV, HTML or JSON.
"""
from __future__ import annotations

import argparse
import logging
import shutil
import sys
from typing import Sequence

from . import __version__
from .config import FstatConfig
from .errors import ExitCode, FstatError
from .pipeline import load_names, run_pipeline

logger = logging.getLogger(__name__)


def _term_width() -> int:
    try:
        if sys.stdout.isatty():
            return shutil.get_terminal_size((100, 24)).columns
    except (OSError, ValueError):
        pass
    return 200  # wide for non-tty (tests / piping)


def _keep_undecodable_bytes(*streams) -> None:
    # Path names are bytes; round-trip anything that is not UTF-8 unchanged.
    for stream in streams:
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="surrogateescape")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fstat",
        description="Get info for a list of files across multiple directories.",
    )
    p.add_argument(
        "input",
        metavar="FILE",
        nargs="?",
        default=None,
        help="File containing one path per line (defaults to stdin).",
    )
    p.add_argument("-g", "--glob", metavar="PATTERNS",
                   help="Whitespace-separated glob patterns to expand instead of reading a list.")

    # Sorting (at most one)
    p.add_argument("-s", "--sort-size", action="store_true", help="Sort by file size.")
    p.add_argument("-S", "--sort-size-desc", action="store_true", help="Sort by file size, descending.")
    p.add_argument("-d", "--sort-time", action="store_true", help="Sort by modification time.")
    p.add_argument("-D", "--sort-time-desc", action="store_true", help="Sort by modification time, newest first.")
    p.add_argument("-n", "--sort-name", action="store_true", help="Sort by file name.")
    p.add_argument("-N", "--sort-name-desc", action="store_true", help="Sort by file name, reverse order.")
    p.add_argument("-i", "--sort-iname", action="store_true", help="Case-insensitive sort by file name.")
    p.add_argument("-I", "--sort-iname-desc", action="store_true",
                   help="Case-insensitive sort by file name, reverse order.")

    # Filters
    p.add_argument("-x", "--exclude-dot", action="store_true",
                   help="Skip dot files and anything inside a dot directory.")
    p.add_argument("-e", "--exclude", metavar="REGEX", help="Skip paths matching this regular expression.")
    p.add_argument("-f", "--include", metavar="REGEX", help="Only keep paths matching this regular expression.")
    p.add_argument("--newer", metavar="YYYYMMDD", help="Only keep entries modified on or after this date.")
    p.add_argument("--older", metavar="YYYYMMDD", help="Only keep entries modified on or before this date.")
    p.add_argument("--smaller", metavar="SIZE", help="Only keep files of at most SIZE bytes (e.g. 1024, 500K, 2M).")
    p.add_argument("--larger", metavar="SIZE", help="Only keep files of at least SIZE bytes (e.g. 1024, 500K, 2M).")

    # Presentation
    p.add_argument("-c", "--commas", action="store_true", help="Add comma thousands separators to sizes.")
    p.add_argument("-m", "--mebibytes", action="store_true", help="Show sizes in mebibytes.")
    p.add_argument("-M", "--milliseconds", action="store_true", help="Show modification times with milliseconds.")
    p.add_argument("-t", "--totals", action="store_true", help="Append totals and averages (table output only).")
    p.add_argument("-T", "--no-truncate", action="store_true", help="Never shorten long names.")
    p.add_argument("-w", "--width", type=int, metavar="N", help="Shorten names wider than N terminal columns.")
    p.add_argument("--csv", action="store_true", help="Output CSV.")
    p.add_argument("--html", action="store_true", help="Output an HTML table.")
    p.add_argument("--json", action="store_true", help="Output JSON.")

    # General
    p.add_argument("-q", "--quiet", action="store_true", help="Do not display file errors.")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    _keep_undecodable_bytes(sys.stdin, sys.stdout, sys.stderr)

    try:
        config = FstatConfig.from_args(args, terminal_width=_term_width())
        names = load_names(config)
        output = run_pipeline(names, config)
    except FstatError as e:
        logger.debug("fatal: %s (exit %d)", e, e.exit_code)
        sys.stderr.write(f"Error: {e}\n")
        return int(e.exit_code)

    sys.stdout.write(output)
    return int(ExitCode.OK)


if __name__ == "__main__":
    raise SystemExit(main())
