#!/usr/bin/env python3
"""
Filter engine for collected entries.

Name predicates (dotfiles, exclude/include regex) only look at the supplied
path string and run before the file is stat'ed. Metadata predicates (date and
size ranges) run on the resulting Entry. Every active predicate must pass.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .models import Entry
from .size_utils import format_size


def is_dot_path(name: str) -> bool:
    """True for a dot-named basename, or any path component starting with a dot."""
    if os.path.basename(name).startswith("."):
        return True
    for sep in (os.sep, os.altsep):
        if sep and (sep + ".") in name:
            return True
    return False


@dataclass(frozen=True)
class FilterOptions:
    """
    Predicates applied while collecting entries.

    All active criteria are combined with AND logic. Size bounds of 0 are
    disabled; date bounds of None are disabled.
    """
    exclude_dot: bool = False
    exclude_regex: Optional[re.Pattern] = None
    include_regex: Optional[re.Pattern] = None
    newer: Optional[datetime] = None  # earliest accepted mod time
    older: Optional[datetime] = None  # latest accepted mod time
    smaller: int = 0  # largest accepted file size
    larger: int = 0  # smallest accepted file size

    def accepts_name(self, name: str) -> bool:
        if self.exclude_dot and is_dot_path(name):
            return False
        # exclude is always checked before include
        if self.exclude_regex is not None and self.exclude_regex.search(name):
            return False
        if self.include_regex is not None and not self.include_regex.search(name):
            return False
        return True

    def accepts_entry(self, entry: Entry) -> bool:
        if self.older is not None and entry.mod_time > self.older:
            return False
        if self.newer is not None and entry.mod_time < self.newer:
            return False

        # Size bounds only make sense for regular files
        if entry.is_file:
            if self.smaller > 0 and entry.size > self.smaller:
                return False
            if self.larger > 0 and entry.size < self.larger:
                return False
        return True

    def has_filters(self) -> bool:
        return bool(
            self.exclude_dot
            or self.exclude_regex
            or self.include_regex
            or self.newer
            or self.older
            or self.smaller
            or self.larger
        )

    def describe(self) -> str:
        """Return human-readable description of active filters."""
        parts = []
        if self.exclude_dot:
            parts.append("no-dotfiles")
        if self.exclude_regex:
            parts.append(f"exclude={self.exclude_regex.pattern}")
        if self.include_regex:
            parts.append(f"include={self.include_regex.pattern}")
        if self.newer:
            parts.append(f"mtime>={self.newer.isoformat(sep=' ')}")
        if self.older:
            parts.append(f"mtime<={self.older.isoformat(sep=' ')}")
        if self.larger:
            parts.append(f"size>={format_size(self.larger, commas=True)}")
        if self.smaller:
            parts.append(f"size<={format_size(self.smaller, commas=True)}")
        return " AND ".join(parts) if parts else "No filters"
