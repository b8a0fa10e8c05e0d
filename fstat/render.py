from __future__ import annotations

"""
Renderers for the final row list: text table, CSV, HTML and JSON.

Every renderer returns the complete output as a string so nothing reaches
stdout until rendering succeeded. Structured formats carry the display
strings (the same text the table shows), not typed values.
"""

import csv
import io
import json
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from rich import box
from rich.cells import cell_len, get_character_cell_size
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import OutputFormat, RenderOptions
from .errors import RenderError
from .models import COLUMNS, DataRow, Entry, Row, SummaryRow
from .size_utils import format_size

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT_MS = "%Y-%m-%d %H:%M:%S.%f"
ELLIPSIS = "..."


def format_mod_time(mod_time: datetime, milliseconds: bool = False) -> str:
    text = mod_time.strftime(TIME_FORMAT)
    if milliseconds:
        text += f".{mod_time.microsecond // 1000:03d}"
    return text


def _fit_cells(chars: Iterable[str], budget: int) -> str:
    out = []
    used = 0
    for ch in chars:
        used += get_character_cell_size(ch)
        if used > budget:
            break
        out.append(ch)
    return "".join(out)


def truncate_name(name: str, limit: Optional[int]) -> str:
    """Elide the middle of ``name`` so it takes at most ``limit`` terminal cells."""
    if limit is None or cell_len(name) <= limit:
        return name
    if limit <= len(ELLIPSIS):
        return _fit_cells(name, limit)
    keep = limit - len(ELLIPSIS)
    head = (keep + 1) // 2
    tail = _fit_cells(reversed(name), keep - head)[::-1]
    return _fit_cells(name, head) + ELLIPSIS + tail


def build_rows(entries: Iterable[Entry], options: RenderOptions) -> List[DataRow]:
    return [
        DataRow(
            mod_time=format_mod_time(e.mod_time, options.milliseconds),
            size=format_size(e.size, commas=options.commas, mebibytes=options.mebibytes),
            type=e.entry_type.letter,
            name=e.full_name,
        )
        for e in entries
    ]


# ---------------------------- Table -------------------------------------------

def _make_console(buf: io.StringIO, width: int) -> Console:
    # Plain text only: the table is captured and written by the caller.
    return Console(
        file=buf,
        width=width,
        force_terminal=False,
        no_color=True,
        highlight=False,
        soft_wrap=False,
        emoji=False,
    )


def render_table(rows: Sequence[Row], name_limit: Optional[int] = None) -> str:
    """ASCII table with summary rows below a separator. Empty input renders nothing."""
    if not rows:
        return ""

    table = Table(box=box.ASCII, show_header=True, header_style=None, show_edge=True)
    table.add_column(COLUMNS[0], no_wrap=True)
    table.add_column(COLUMNS[1], justify="right", no_wrap=True)
    table.add_column(COLUMNS[2], justify="center", no_wrap=True)
    table.add_column(COLUMNS[3], no_wrap=True)

    widths = [len(c) for c in COLUMNS]
    in_summary = False
    for row in rows:
        if isinstance(row, SummaryRow) and not in_summary:
            table.add_section()
            in_summary = True
        cells = row.cells()
        if isinstance(row, DataRow):
            cells[3] = truncate_name(cells[3], name_limit)
        widths = [max(w, cell_len(c)) for w, c in zip(widths, cells)]
        table.add_row(*(Text(c) for c in cells))

    # One space of padding per side and one border per column, plus slack.
    buf = io.StringIO()
    console = _make_console(buf, sum(widths) + 3 * len(widths) + 8)
    console.print(table)
    return buf.getvalue()


# ---------------------------- Structured formats ------------------------------

def _data_rows(rows: Sequence[Row], fmt: OutputFormat) -> List[DataRow]:
    for row in rows:
        if not isinstance(row, DataRow):
            raise RenderError(f"summary rows cannot be rendered as {fmt.value}")
    return list(rows)  # type: ignore[arg-type]


def render_csv(rows: Sequence[Row]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(COLUMNS)
    for row in _data_rows(rows, OutputFormat.CSV):
        writer.writerow(row.cells())
    return buf.getvalue()


def render_html(rows: Sequence[Row]) -> str:
    # Paths are written as-is; callers supply trusted names.
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        "<title>fstat</title>",
        "</head>",
        "<body>",
        "<table>",
        "<tr>" + "".join(f"<th>{c}</th>" for c in COLUMNS) + "</tr>",
    ]
    for row in _data_rows(rows, OutputFormat.HTML):
        lines.append("<tr>" + "".join(f"<td>{c}</td>" for c in row.cells()) + "</tr>")
    lines += ["</table>", "</body>", "</html>"]
    return "\n".join(lines) + "\n"


def _check_mod_time(text: str) -> None:
    for fmt in (TIME_FORMAT, TIME_FORMAT_MS):
        try:
            datetime.strptime(text, fmt)
            return
        except ValueError:
            continue
    raise RenderError(f"malformed modification time in output row: {text!r}")


def render_json(rows: Sequence[Row]) -> str:
    """Indented array of objects whose values are the display strings."""
    records = []
    for row in _data_rows(rows, OutputFormat.JSON):
        _check_mod_time(row.mod_time)
        records.append(dict(zip(COLUMNS, row.cells())))
    return json.dumps(records, indent=4) + "\n"


def render(rows: Sequence[Row], options: RenderOptions) -> str:
    fmt = options.output_format
    logger.debug("render: format=%s rows=%d", fmt.value, len(rows))
    if fmt is OutputFormat.CSV:
        return render_csv(rows)
    if fmt is OutputFormat.HTML:
        return render_html(rows)
    if fmt is OutputFormat.JSON:
        return render_json(rows)
    return render_table(rows, options.name_limit)
