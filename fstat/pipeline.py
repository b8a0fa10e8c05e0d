from __future__ import annotations

"""
The filter -> sort -> aggregate -> render pipeline, plus input acquisition.

Each run owns its entry list from collection to rendering; nothing is kept
between runs.
"""

import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from .aggregate import compute_totals, summary_rows
from .collector import StatFunc, collect_entries
from .config import FstatConfig
from .errors import ConfigError, ExitCode
from .inputs import expand_globs, read_names
from .models import Row
from .render import build_rows, render
from .sorting import sort_entries

logger = logging.getLogger(__name__)


def load_names(config: FstatConfig, stdin: Optional[TextIO] = None) -> List[str]:
    """Names from --glob, the FILE argument, or stdin, in that order of preference."""
    if config.glob_patterns:
        names = expand_globs(config.glob_patterns)
    elif config.input_file:
        try:
            with open(config.input_file, "r", encoding="utf-8", errors="surrogateescape") as f:
                names = read_names(f)
        except OSError as e:
            raise ConfigError(f"cannot read input list: {e}", ExitCode.INPUT_ERROR) from e
    else:
        names = read_names(stdin if stdin is not None else sys.stdin)

    if not names:
        raise ConfigError("no file names were given", ExitCode.EMPTY_INPUT)
    logger.debug("load_names: %d names", len(names))
    return names


def run_pipeline(
    names: Sequence[str],
    config: FstatConfig,
    stat_func: StatFunc = os.lstat,
    err: Optional[TextIO] = None,
) -> str:
    """Collect, filter, sort, optionally total, and render. Returns the output text."""
    entries = collect_entries(names, config.filters, quiet=config.quiet, stat_func=stat_func, err=err)
    sort_entries(entries, config.sort)

    rows: List[Row] = list(build_rows(entries, config.render))
    if config.totals:
        rows.extend(summary_rows(compute_totals(entries), config.render))
    return render(rows, config.render)
