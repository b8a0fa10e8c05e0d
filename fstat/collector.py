from __future__ import annotations

"""
Entry collection: stat each supplied path and keep the ones that pass the filters.

Per-path stat failures are not fatal. They are reported on the error stream
(unless quiet) and the path is skipped; input order is preserved.
"""

import logging
import os
import stat
import sys
from datetime import datetime
from typing import Callable, Iterable, List, Optional, TextIO

from .filters import FilterOptions
from .models import Entry, EntryType

logger = logging.getLogger(__name__)

StatFunc = Callable[[str], os.stat_result]


def entry_type_from_mode(mode: int) -> EntryType:
    if stat.S_ISREG(mode):
        return EntryType.FILE
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    return EntryType.UNKNOWN


def stat_entry(name: str, stat_func: StatFunc = os.lstat) -> Entry:
    """Build an Entry for ``name``. Symlinks are not followed. Raises OSError."""
    st = stat_func(name)
    return Entry(
        full_name=name,
        size=st.st_size,
        mod_time=datetime.fromtimestamp(st.st_mtime),
        entry_type=entry_type_from_mode(st.st_mode),
    )


def collect_entries(
    names: Iterable[str],
    options: FilterOptions,
    quiet: bool = False,
    stat_func: StatFunc = os.lstat,
    err: Optional[TextIO] = None,
) -> List[Entry]:
    """Return entries for every name that can be stat'ed and passes all filters."""
    err = err if err is not None else sys.stderr
    if options.has_filters():
        logger.debug("collect_entries: filters=%s", options.describe())

    entries: List[Entry] = []
    seen = rejected = failed = 0
    for name in names:
        seen += 1
        if not options.accepts_name(name):
            rejected += 1
            continue
        try:
            entry = stat_entry(name, stat_func)
        except OSError as e:
            failed += 1
            logger.debug("collect_entries: skipping %s: %s", name, e)
            if not quiet:
                err.write(f"Error: {e}\n")
            continue
        if not options.accepts_entry(entry):
            rejected += 1
            continue
        entries.append(entry)

    logger.debug(
        "collect_entries: seen=%d kept=%d rejected=%d failed=%d",
        seen, len(entries), rejected, failed,
    )
    return entries
