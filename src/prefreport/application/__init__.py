"""Application layer - use cases and port definitions.

Contains use cases that orchestrate domain logic and port protocols that
define the interfaces for adapter implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
    * :mod:`.analysis` - Site export analysis use case
    * :mod:`.inputs` - Input resolution for interactive runs
"""

from __future__ import annotations

from .analysis import analyze_site_export
from .inputs import resolve_value
from .ports import (
    BuildCatalog,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadReportSettings,
    MergeEnvironments,
    WriteReports,
)

__all__ = [
    "BuildCatalog",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadReportSettings",
    "MergeEnvironments",
    "WriteReports",
    "analyze_site_export",
    "resolve_value",
]
