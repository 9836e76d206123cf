"""POSIX-conventional exit codes for CLI error paths.

Provides a single :class:`ExitCode` enum so every ``SystemExit`` raised by a
CLI command carries a meaningful, grep-friendly integer instead of a bare ``1``.

Signal codes (130, 141, 143) are informational constants only; the application
never raises ``SystemExit`` with these values; ``lib_cli_exit_tools`` handles
signal-to-exit-code translation automatically.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0–1: generic success / failure
    * 2: ENOENT (site export folder missing)
    * 22: EINVAL (unusable report name)
    * 73: EX_CANTCREAT (report artifact could not be written)
    * 78: EX_CONFIG (invalid ``[report]`` settings)
    * 128+N: signal N (informational only)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.CANNOT_CREATE)
        73
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    CANNOT_CREATE = 73
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
