from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status, one per failure class. 2 is left to argparse usage errors."""
    OK = 0
    INPUT_ERROR = 1
    BAD_EXCLUDE_REGEX = 3
    BAD_INCLUDE_REGEX = 4
    BAD_DATE = 5
    BAD_DATE_RANGE = 6
    BAD_SIZE = 7
    BAD_SIZE_RANGE = 8
    FORMAT_CONFLICT = 9
    TRUNCATE_CONFLICT = 10
    EMPTY_INPUT = 11
    NO_GLOB_MATCHES = 12
    RENDER_ERROR = 13
    BAD_WIDTH = 14
    SORT_CONFLICT = 15


class FstatError(Exception):
    """Base error; carries the exit code the CLI should return."""

    exit_code: ExitCode = ExitCode.INPUT_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(FstatError, ValueError):
    """Invalid flag combination, pattern, date, size or input list."""


class RenderError(FstatError):
    """Intermediate row data could not be serialized."""

    exit_code = ExitCode.RENDER_ERROR
