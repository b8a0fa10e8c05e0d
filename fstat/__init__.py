"""Report file metadata for an arbitrary list of paths."""

__version__ = "1.1.0"

from .aggregate import Totals, compute_totals, summary_rows
from .collector import collect_entries, stat_entry
from .config import FilterOptions, FstatConfig, OutputFormat, RenderOptions, SortKey, SortOptions
from .errors import ConfigError, ExitCode, FstatError, RenderError
from .models import DataRow, Entry, EntryType, SummaryRow
from .pipeline import load_names, run_pipeline
from .render import render
from .sorting import sort_entries

__all__ = [
    "Totals",
    "compute_totals",
    "summary_rows",
    "collect_entries",
    "stat_entry",
    "FilterOptions",
    "FstatConfig",
    "OutputFormat",
    "RenderOptions",
    "SortKey",
    "SortOptions",
    "ConfigError",
    "ExitCode",
    "FstatError",
    "RenderError",
    "DataRow",
    "Entry",
    "EntryType",
    "SummaryRow",
    "load_names",
    "run_pipeline",
    "render",
    "sort_entries",
]
