from __future__ import annotations

"""
Size parsing and formatting for the listing.

- parse_size_to_bytes: read --smaller/--larger values such as "1024", "500K" or "2G".
- format_size: render a byte count the way the listing shows it (optional MiB, optional commas).
"""

import re
from typing import Optional

MEBIBYTE = 1048576

_SIZE_RE = re.compile(r"(?P<num>\d[\d,]*(?:\.\d+)?)\s*(?P<unit>[kmgt]?)b?", re.IGNORECASE)
_UNIT_FACTOR = {"": 1, "k": 1024, "m": 1024**2, "g": 1024**3, "t": 1024**4}


def parse_size_to_bytes(raw: Optional[str]) -> Optional[int]:
    """
    Parse a byte count with an optional binary suffix (K, M, G, T, optional 'B').

    Returns None for None or blank input; raises ValueError otherwise when the
    text is not a size.
    """
    if raw is None or not raw.strip():
        return None
    m = _SIZE_RE.fullmatch(raw.strip())
    if m is None:
        raise ValueError(f"'{raw}' is not a size; expected a byte count with an optional K, M, G or T suffix")
    value = float(m.group("num").replace(",", ""))
    return int(value * _UNIT_FACTOR[m.group("unit").lower()])


def format_size(num_bytes: int, commas: bool = False, mebibytes: bool = False) -> str:
    """Divide into MiB first (truncating), then insert thousands separators."""
    if mebibytes:
        num_bytes //= MEBIBYTE
    if commas:
        return f"{num_bytes:,}"
    return str(num_bytes)
