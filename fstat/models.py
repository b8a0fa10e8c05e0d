from __future__ import annotations

"""
Value types shared by every pipeline stage.

Entries are produced by the collector and never mutated afterwards. Rows are
what the renderers consume: ``DataRow`` for a real entry, ``SummaryRow`` for an
aggregate line appended by ``--totals``.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union


class EntryType(Enum):
    """Kind of filesystem object behind a path."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"

    @property
    def letter(self) -> str:
        return _TYPE_LETTERS[self]


_TYPE_LETTERS = {
    EntryType.FILE: "F",
    EntryType.DIRECTORY: "D",
    EntryType.SYMLINK: "L",
    EntryType.UNKNOWN: "?",
}


@dataclass(frozen=True)
class Entry:
    full_name: str  # exactly as supplied, not normalized
    size: int
    mod_time: datetime  # naive local time
    entry_type: EntryType

    @property
    def is_file(self) -> bool:
        return self.entry_type is EntryType.FILE


@dataclass(frozen=True)
class DataRow:
    mod_time: str
    size: str
    type: str
    name: str

    def cells(self) -> list[str]:
        return [self.mod_time, self.size, self.type, self.name]


@dataclass(frozen=True)
class SummaryRow:
    label: str
    value: str

    def cells(self) -> list[str]:
        # Summary lines have no time or type; the label sits in the name column.
        return ["", self.value, "", self.label]


Row = Union[DataRow, SummaryRow]

COLUMNS = ("Mod Time", "Size", "Type", "Name")
