from __future__ import annotations

"""
Input list acquisition: names from a text stream or from glob patterns.
"""

import glob
import logging
from typing import Iterable, List, TextIO

from .errors import ConfigError, ExitCode

logger = logging.getLogger(__name__)


def read_names(stream: TextIO) -> List[str]:
    """One path per line; line endings stripped, blank lines dropped."""
    names = []
    for line in stream:
        name = line.rstrip("\r\n")
        if name:
            names.append(name)
    return names


def expand_globs(patterns: Iterable[str]) -> List[str]:
    """
    Expand shell-style patterns in order, keeping the first occurrence of each path.

    Raises ConfigError when nothing matches at all.
    """
    patterns = list(patterns)
    names: List[str] = []
    seen = set()
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        logger.debug("expand_globs: %s -> %d matches", pattern, len(matches))
        for match in matches:
            if match not in seen:
                seen.add(match)
                names.append(match)
    if not names:
        raise ConfigError(
            f"no files matched glob pattern(s): {' '.join(patterns)}",
            ExitCode.NO_GLOB_MATCHES,
        )
    return names
