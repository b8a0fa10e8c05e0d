#!/usr/bin/env python3
"""
Immutable run configuration.

``FstatConfig.from_args`` turns the argparse namespace into one frozen record and
rejects every invalid flag combination up front, so the pipeline never sees a
half-valid configuration. Each stage only receives its own sub-record.
"""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from .errors import ConfigError, ExitCode
from .filters import FilterOptions
from .size_utils import format_size, parse_size_to_bytes

DATE_FORMAT = "%Y%m%d"
NAME_MARGIN = 60  # room left for the time, size and type columns plus borders
MIN_NAME_WIDTH = 10


class SortKey(Enum):
    SIZE = "size"
    MOD_TIME = "mod_time"
    NAME = "name"
    NAME_CI = "name_ci"


class OutputFormat(Enum):
    TABLE = "table"
    CSV = "csv"
    HTML = "html"
    JSON = "json"


# argparse dest -> (key, descending)
SORT_FLAGS = {
    "sort_size": (SortKey.SIZE, False),
    "sort_size_desc": (SortKey.SIZE, True),
    "sort_time": (SortKey.MOD_TIME, False),
    "sort_time_desc": (SortKey.MOD_TIME, True),
    "sort_name": (SortKey.NAME, False),
    "sort_name_desc": (SortKey.NAME, True),
    "sort_iname": (SortKey.NAME_CI, False),
    "sort_iname_desc": (SortKey.NAME_CI, True),
}

FORMAT_FLAGS = {
    "csv": OutputFormat.CSV,
    "html": OutputFormat.HTML,
    "json": OutputFormat.JSON,
}


@dataclass(frozen=True)
class SortOptions:
    key: SortKey
    descending: bool = False


@dataclass(frozen=True)
class RenderOptions:
    output_format: OutputFormat = OutputFormat.TABLE
    commas: bool = False
    mebibytes: bool = False
    milliseconds: bool = False
    truncate: bool = True
    width: Optional[int] = None  # explicit name width, overrides terminal detection
    terminal_width: int = 80

    @property
    def name_limit(self) -> Optional[int]:
        """Longest name the table shows before eliding, or None for no limit."""
        if not self.truncate:
            return None
        if self.width is not None:
            return self.width
        return max(self.terminal_width - NAME_MARGIN, MIN_NAME_WIDTH)


@dataclass(frozen=True)
class FstatConfig:
    filters: FilterOptions = field(default_factory=FilterOptions)
    sort: Optional[SortOptions] = None
    render: RenderOptions = field(default_factory=RenderOptions)
    totals: bool = False
    quiet: bool = False
    input_file: Optional[str] = None
    glob_patterns: Tuple[str, ...] = ()

    @classmethod
    def from_args(cls, args: argparse.Namespace, terminal_width: int = 80) -> "FstatConfig":
        """Validate CLI arguments and build the config. Raises ConfigError."""
        sort = _sort_from_args(args)
        render = _render_from_args(args, terminal_width)
        totals = bool(getattr(args, "totals", False))
        if totals and render.output_format is not OutputFormat.TABLE:
            raise ConfigError(
                f"--totals cannot be combined with --{render.output_format.value}",
                ExitCode.FORMAT_CONFLICT,
            )
        filters = _filters_from_args(args)

        glob_arg = getattr(args, "glob", None)
        glob_patterns = tuple(glob_arg.split()) if glob_arg else ()
        input_file = getattr(args, "input", None)
        if glob_patterns and input_file:
            raise ConfigError("a FILE argument cannot be combined with --glob", ExitCode.INPUT_ERROR)

        return cls(
            filters=filters,
            sort=sort,
            render=render,
            totals=totals,
            quiet=bool(getattr(args, "quiet", False)),
            input_file=input_file,
            glob_patterns=glob_patterns,
        )


def parse_date_bound(raw: str, flag: str, end_of_day: bool) -> datetime:
    """
    Turn a YYYYMMDD calendar date into a local-time bound.

    With ``end_of_day`` the bound is the midnight that ends the given day, so
    anything stamped during that day is still "older or equal". Otherwise it
    is the midnight that starts the day, so anything stamped during that day
    is "newer or equal".
    """
    try:
        day: date = datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise ConfigError(f"invalid {flag} date '{raw}', expected YYYYMMDD", ExitCode.BAD_DATE) from e
    if end_of_day:
        day += timedelta(days=1)
    return datetime.combine(day, time.min)


def _sort_from_args(args: argparse.Namespace) -> Optional[SortOptions]:
    chosen: List[Tuple[SortKey, bool]] = [
        flag for dest, flag in SORT_FLAGS.items() if getattr(args, dest, False)
    ]
    if len(chosen) > 1:
        raise ConfigError("only one sorting argument can be given", ExitCode.SORT_CONFLICT)
    if not chosen:
        return None
    key, descending = chosen[0]
    return SortOptions(key=key, descending=descending)


def _render_from_args(args: argparse.Namespace, terminal_width: int) -> RenderOptions:
    formats = [fmt for dest, fmt in FORMAT_FLAGS.items() if getattr(args, dest, False)]
    if len(formats) > 1:
        names = ", ".join(f"--{f.value}" for f in formats)
        raise ConfigError(f"only one output format can be given ({names})", ExitCode.FORMAT_CONFLICT)
    output_format = formats[0] if formats else OutputFormat.TABLE

    commas = bool(getattr(args, "commas", False))
    if commas and output_format is OutputFormat.CSV:
        raise ConfigError("--commas cannot be combined with --csv", ExitCode.FORMAT_CONFLICT)

    no_truncate = bool(getattr(args, "no_truncate", False))
    width = getattr(args, "width", None)
    if no_truncate and width is not None:
        raise ConfigError("--no-truncate cannot be combined with --width", ExitCode.TRUNCATE_CONFLICT)
    if width is not None and width < 1:
        raise ConfigError(f"--width must be a positive number, got {width}", ExitCode.BAD_WIDTH)

    return RenderOptions(
        output_format=output_format,
        commas=commas,
        mebibytes=bool(getattr(args, "mebibytes", False)),
        milliseconds=bool(getattr(args, "milliseconds", False)),
        truncate=not no_truncate,
        width=width,
        terminal_width=terminal_width,
    )


def _filters_from_args(args: argparse.Namespace) -> FilterOptions:
    exclude_regex = _compile(getattr(args, "exclude", None), "--exclude", ExitCode.BAD_EXCLUDE_REGEX)
    include_regex = _compile(getattr(args, "include", None), "--include", ExitCode.BAD_INCLUDE_REGEX)

    newer = older = None
    if getattr(args, "newer", None):
        newer = parse_date_bound(args.newer, "--newer", end_of_day=False)
    if getattr(args, "older", None):
        older = parse_date_bound(args.older, "--older", end_of_day=True)
    if newer and older and newer >= older:
        raise ConfigError(
            f"--newer ({args.newer}) must not be later than --older ({args.older})",
            ExitCode.BAD_DATE_RANGE,
        )

    smaller = _size(getattr(args, "smaller", None), "--smaller")
    larger = _size(getattr(args, "larger", None), "--larger")
    if smaller and larger and larger > smaller:
        raise ConfigError(
            f"--larger ({format_size(larger, commas=True)} bytes) cannot be greater than "
            f"--smaller ({format_size(smaller, commas=True)} bytes)",
            ExitCode.BAD_SIZE_RANGE,
        )

    return FilterOptions(
        exclude_dot=bool(getattr(args, "exclude_dot", False)),
        exclude_regex=exclude_regex,
        include_regex=include_regex,
        newer=newer,
        older=older,
        smaller=smaller,
        larger=larger,
    )


def _compile(pattern: Optional[str], flag: str, code: ExitCode) -> Optional[re.Pattern]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"invalid {flag} regex '{pattern}': {e}", code) from e


def _size(raw: Optional[str], flag: str) -> int:
    try:
        return parse_size_to_bytes(raw) or 0
    except ValueError as e:
        raise ConfigError(f"invalid {flag}: {e}", ExitCode.BAD_SIZE) from e
