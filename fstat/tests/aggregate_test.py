from __future__ import annotations

from datetime import datetime

from fstat.aggregate import Totals, compute_totals, summary_rows
from fstat.config import RenderOptions
from fstat.models import Entry, EntryType, SummaryRow

NOW = datetime(2019, 3, 25, 12, 0, 0)


def _e(name, kind, size=0):
    return Entry(full_name=name, size=size, mod_time=NOW, entry_type=kind)


def test_totals_for_files_and_dirs():
    entries = [
        _e("a", EntryType.FILE, 10),
        _e("b", EntryType.FILE, 20),
        _e("c", EntryType.FILE, 30),
        _e("d1", EntryType.DIRECTORY, 4096),
        _e("d2", EntryType.DIRECTORY, 4096),
    ]
    totals = compute_totals(entries)
    assert totals.total_size == 60
    assert totals.file_count == 3
    assert totals.dir_count == 2
    assert totals.link_count == 0
    assert totals.average_file_size == 20
    assert totals.average_files_per_dir == 1


def test_directory_and_link_sizes_are_not_counted():
    totals = compute_totals([_e("d", EntryType.DIRECTORY, 4096), _e("l", EntryType.SYMLINK, 12)])
    assert totals.total_size == 0
    assert totals.link_count == 1


def test_averages_are_zero_without_files_or_dirs():
    assert Totals().average_file_size == 0
    assert Totals().average_files_per_dir == 0
    assert Totals(total_size=7, file_count=2).average_file_size == 3


def test_summary_rows_labels_and_values():
    rows = summary_rows(Totals(total_size=60, file_count=3, dir_count=2), RenderOptions())
    assert all(isinstance(r, SummaryRow) for r in rows)
    assert [(r.label, r.value) for r in rows] == [
        ("total size", "60"),
        ("files", "3"),
        ("directories", "2"),
        ("symlinks", "0"),
        ("average file size", "20"),
        ("average files per directory", "1"),
    ]


def test_summary_rows_follow_size_options():
    totals = Totals(total_size=3 * 1048576 * 1000, file_count=1500, dir_count=1)
    rows = {r.label: r.value for r in summary_rows(totals, RenderOptions(commas=True, mebibytes=True))}
    assert rows["total size"] == "3,000"
    assert rows["files"] == "1,500"  # counts are never divided
    assert rows["average file size"] == "2"


def test_summary_row_cells_leave_time_and_type_empty():
    assert SummaryRow("files", "3").cells() == ["", "3", "", "files"]
