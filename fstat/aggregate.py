#!/usr/bin/env python3
"""
Totals over the final entry list.

The summary is computed once after sorting and handed to the renderer as
``SummaryRow`` values; it never goes back through filtering or sorting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .config import RenderOptions
from .models import Entry, EntryType, SummaryRow
from .size_utils import format_size


@dataclass(frozen=True)
class Totals:
    total_size: int = 0
    file_count: int = 0
    dir_count: int = 0
    link_count: int = 0

    @property
    def average_file_size(self) -> int:
        return self.total_size // self.file_count if self.file_count else 0

    @property
    def average_files_per_dir(self) -> int:
        return self.file_count // self.dir_count if self.dir_count else 0


def compute_totals(entries: Iterable[Entry]) -> Totals:
    total_size = file_count = dir_count = link_count = 0
    for entry in entries:
        if entry.entry_type is EntryType.FILE:
            file_count += 1
            total_size += entry.size
        elif entry.entry_type is EntryType.DIRECTORY:
            dir_count += 1
        elif entry.entry_type is EntryType.SYMLINK:
            link_count += 1
    return Totals(
        total_size=total_size,
        file_count=file_count,
        dir_count=dir_count,
        link_count=link_count,
    )


def summary_rows(totals: Totals, options: RenderOptions) -> List[SummaryRow]:
    """Sizes honour --mebibytes and --commas; counts only honour --commas."""
    def size(value: int) -> str:
        return format_size(value, commas=options.commas, mebibytes=options.mebibytes)

    def count(value: int) -> str:
        return format_size(value, commas=options.commas)

    return [
        SummaryRow("total size", size(totals.total_size)),
        SummaryRow("files", count(totals.file_count)),
        SummaryRow("directories", count(totals.dir_count)),
        SummaryRow("symlinks", count(totals.link_count)),
        SummaryRow("average file size", size(totals.average_file_size)),
        SummaryRow("average files per directory", count(totals.average_files_per_dir)),
    ]
