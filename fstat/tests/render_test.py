from __future__ import annotations

import csv
import io
import json
from datetime import datetime

import pytest
from rich.cells import cell_len

from fstat.config import OutputFormat, RenderOptions
from fstat.errors import RenderError
from fstat.models import COLUMNS, DataRow, Entry, EntryType, SummaryRow
from fstat.render import (
    build_rows,
    format_mod_time,
    render,
    render_csv,
    render_html,
    render_json,
    render_table,
    truncate_name,
)

WHEN = datetime(2019, 3, 25, 12, 0, 0)


def _entries():
    return [
        Entry("a.txt", 1234, WHEN, EntryType.FILE),
        Entry("some dir", 4096, WHEN, EntryType.DIRECTORY),
        Entry("link", 7, WHEN, EntryType.SYMLINK),
    ]


def test_format_mod_time_seconds_and_milliseconds():
    assert format_mod_time(WHEN) == "2019-03-25 12:00:00"
    assert format_mod_time(WHEN, milliseconds=True) == "2019-03-25 12:00:00.000"
    assert format_mod_time(WHEN.replace(microsecond=123999), milliseconds=True) == "2019-03-25 12:00:00.123"


def test_truncate_name_elides_middle():
    name = "abcdefghijklmnopqrstuvwxyz"
    assert truncate_name(name, 10) == "abcd...xyz"
    assert len(truncate_name(name, 11)) == 11
    assert truncate_name(name, None) == name
    assert truncate_name("short", 10) == "short"
    assert truncate_name(name, 3) == "abc"


def test_build_rows_formats_each_column():
    rows = build_rows(_entries(), RenderOptions(commas=True))
    assert rows[0] == DataRow("2019-03-25 12:00:00", "1,234", "F", "a.txt")
    assert [r.type for r in rows] == ["F", "D", "L"]


def test_build_rows_mebibytes_before_commas():
    entry = Entry("big.iso", 2500 * 1048576 + 1048575, WHEN, EntryType.FILE)
    (row,) = build_rows([entry], RenderOptions(commas=True, mebibytes=True))
    assert row.size == "2,500"


def test_table_empty_renders_nothing():
    assert render_table([]) == ""
    assert render([], RenderOptions()) == ""


def test_table_contents():
    out = render_table(build_rows(_entries(), RenderOptions()))
    assert "\x1b" not in out
    lines = out.splitlines()
    assert any("Mod Time" in l and "Size" in l and "Type" in l and "Name" in l for l in lines[:3])
    body = [l for l in lines if "a.txt" in l]
    assert len(body) == 1
    assert "2019-03-25 12:00:00" in body[0] and "1234" in body[0] and " F " in body[0]
    assert len({len(l) for l in lines}) == 1


def test_table_names_with_markup_are_literal():
    rows = [DataRow("2019-03-25 12:00:00", "1", "F", "[bold]x[/bold] :smile:")]
    assert "[bold]x[/bold] :smile:" in render_table(rows)


def test_table_truncates_long_names():
    long_name = "d" * 30 + "/" + "f" * 30 + ".txt"
    rows = [DataRow("2019-03-25 12:00:00", "1", "F", long_name)]
    out = render_table(rows, name_limit=20)
    assert long_name not in out
    assert truncate_name(long_name, 20) in out
    assert long_name in render_table(rows, name_limit=None)


def test_table_summary_rows_after_data():
    rows = build_rows(_entries(), RenderOptions()) + [SummaryRow("total size", "1234"), SummaryRow("files", "1")]
    lines = render_table(rows, name_limit=10).splitlines()
    data_idx = next(i for i, l in enumerate(lines) if "link" in l)
    total_idx = next(i for i, l in enumerate(lines) if "total size" in l)
    assert total_idx > data_idx + 1  # separated by a rule
    assert "files" in lines[total_idx + 1]


def test_csv_round_trip_recovers_fields():
    entries = _entries() + [Entry('odd,name "quoted".txt', 5, WHEN, EntryType.FILE)]
    rows = build_rows(entries, RenderOptions())
    out = render_csv(rows)
    parsed = list(csv.reader(io.StringIO(out)))
    assert parsed[0] == list(COLUMNS)
    assert parsed[1:] == [r.cells() for r in rows]
    assert out.splitlines()[1] == '"2019-03-25 12:00:00","1234","F","a.txt"'


def test_csv_empty_still_has_header():
    assert render_csv([]) == '"Mod Time","Size","Type","Name"\n'


def test_html_table_is_unescaped():
    rows = [DataRow("2019-03-25 12:00:00", "1", "F", "a&b<c>")]
    out = render_html(rows)
    assert out.startswith("<!DOCTYPE html>")
    assert "<tr><th>Mod Time</th><th>Size</th><th>Type</th><th>Name</th></tr>" in out
    assert "<td>a&b<c></td>" in out
    assert out.rstrip().endswith("</html>")


def test_html_empty_still_has_skeleton():
    out = render_html([])
    assert "<table>" in out and "<th>Name</th>" in out and "<td>" not in out


def test_json_values_are_display_strings():
    rows = build_rows(_entries(), RenderOptions(commas=True, milliseconds=True))
    data = json.loads(render_json(rows))
    assert data[0] == {"Mod Time": "2019-03-25 12:00:00.000", "Size": "1,234", "Type": "F", "Name": "a.txt"}
    assert all(isinstance(v, str) for item in data for v in item.values())
    assert "\n    {" in render_json(rows)


def test_json_empty_is_empty_array():
    assert render_json([]) == "[]\n"


def test_json_malformed_time_is_fatal():
    with pytest.raises(RenderError):
        render_json([DataRow("not a time", "1", "F", "a")])


@pytest.mark.parametrize("fmt", [OutputFormat.CSV, OutputFormat.HTML, OutputFormat.JSON])
def test_structured_formats_reject_summary_rows(fmt):
    with pytest.raises(RenderError):
        render([SummaryRow("files", "1")], RenderOptions(output_format=fmt))


def test_render_dispatch_uses_name_limit():
    rows = [DataRow("2019-03-25 12:00:00", "1", "F", "x" * 50)]
    out = render(rows, RenderOptions(width=12))
    assert "xxxxx...xxxx" in out


def test_truncate_name_counts_terminal_cells():
    name = "漢" * 20  # each character takes two cells
    short = truncate_name(name, 20)
    assert cell_len(short) <= 20
    assert short.startswith("漢") and short.endswith("漢")
    assert "..." in short
    assert truncate_name("漢字", 4) == "漢字"
    assert truncate_name("漢字", 3) == "漢"
