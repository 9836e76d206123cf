"""In-memory adapter implementations for testing.

Provides lightweight implementations of the application ports that operate
entirely in memory -- no report files, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.report` - In-memory report writer (ReportSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .report import CapturedReport, ReportSpy

# Static conformance assertions
if TYPE_CHECKING:
    from prefreport.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        WriteReports,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_write_reports: WriteReports = ReportSpy().write_reports

__all__ = [
    "CapturedReport",
    "ReportSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
]
