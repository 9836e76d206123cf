"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``ReportSettings``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.matrix import PreferenceMatrix
from ..domain.report import PreferenceReport

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.config.settings import ReportSettings


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class LoadReportSettings(Protocol):
    """Load ReportSettings from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ReportSettings: ...


class BuildCatalog(Protocol):
    """Build the initial preference matrix from an export's metadata."""

    def __call__(self, folder: Path) -> PreferenceMatrix: ...


class MergeEnvironments(Protocol):
    """Merge per-tier preference values into a copy of the catalog."""

    def __call__(self, folder: Path, catalog: PreferenceMatrix) -> PreferenceMatrix: ...


class WriteReports(Protocol):
    """Persist every report artifact and return the written paths."""

    def __call__(self, report: PreferenceReport, *, output_dir: Path, base_name: str) -> list[Path]: ...


__all__ = [
    "BuildCatalog",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadReportSettings",
    "MergeEnvironments",
    "WriteReports",
]
