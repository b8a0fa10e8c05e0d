from __future__ import annotations

import errno
import os
import stat
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict

import pytest

# Ensure the fstat package is importable when running tests from a checkout
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def make_stat(mode: int, size: int = 0, when: datetime | None = None) -> os.stat_result:
    ts = (when or datetime(2019, 3, 25, 12, 0, 0)).timestamp()
    return os.stat_result((mode, 0, 0, 1, 0, 0, size, ts, ts, ts))


class FakeFS:
    """Stand-in for os.lstat backed by a dict of synthetic stat results."""

    def __init__(self) -> None:
        self.results: Dict[str, os.stat_result] = {}
        self.calls: list[str] = []

    def add_file(self, name: str, size: int = 0, when: datetime | None = None) -> "FakeFS":
        self.results[name] = make_stat(stat.S_IFREG | 0o644, size, when)
        return self

    def add_dir(self, name: str, when: datetime | None = None, size: int = 4096) -> "FakeFS":
        self.results[name] = make_stat(stat.S_IFDIR | 0o755, size, when)
        return self

    def add_link(self, name: str, when: datetime | None = None) -> "FakeFS":
        self.results[name] = make_stat(stat.S_IFLNK | 0o777, 12, when)
        return self

    def add_fifo(self, name: str) -> "FakeFS":
        self.results[name] = make_stat(stat.S_IFIFO | 0o644)
        return self

    def __call__(self, name: str) -> os.stat_result:
        self.calls.append(name)
        try:
            return self.results[name]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", name) from None


@pytest.fixture
def fake_fs() -> FakeFS:
    return FakeFS()
