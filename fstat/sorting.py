from __future__ import annotations

import logging
from typing import List, Optional

from .config import SortKey, SortOptions
from .models import Entry

logger = logging.getLogger(__name__)


def _sort_by_value(entries: List[Entry], value, descending: bool) -> None:
    # Ties stay name-ascending in both directions, so sort by name first and
    # rely on the stability of list.sort for the primary key.
    entries.sort(key=lambda e: e.full_name)
    entries.sort(key=value, reverse=descending)


def sort_entries(entries: List[Entry], options: Optional[SortOptions]) -> List[Entry]:
    """
    Reorder ``entries`` in place by the selected key and return the same list.

    Size and mod-time sorts break ties by full name ascending. Name sorts use
    the raw path string; NAME_CI compares lower-cased paths. Without options
    the input order is kept.
    """
    if options is None:
        return entries

    logger.debug("sort_entries: key=%s descending=%s count=%d", options.key.value, options.descending, len(entries))
    if options.key is SortKey.SIZE:
        _sort_by_value(entries, lambda e: e.size, options.descending)
    elif options.key is SortKey.MOD_TIME:
        _sort_by_value(entries, lambda e: e.mod_time, options.descending)
    elif options.key is SortKey.NAME:
        entries.sort(key=lambda e: e.full_name, reverse=options.descending)
    elif options.key is SortKey.NAME_CI:
        entries.sort(key=lambda e: e.full_name.lower(), reverse=options.descending)
    return entries
