"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.config.settings import load_report_settings_from_dict

# Logging services
from ..adapters.logging.setup import init_logging

# Report services
from ..adapters.report.writer import write_reports

# Site export services
from ..adapters.site_export.catalog import build_catalog, merge_environments

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.report import ReportSpy
    from ..application.ports import (
        BuildCatalog,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadReportSettings,
        MergeEnvironments,
        WriteReports,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_load_report_settings: LoadReportSettings = load_report_settings_from_dict
    _assert_build_catalog: BuildCatalog = build_catalog
    _assert_merge_environments: MergeEnvironments = merge_environments
    _assert_write_reports: WriteReports = write_reports
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    load_report_settings: LoadReportSettings
    build_catalog: BuildCatalog
    merge_environments: MergeEnvironments
    write_reports: WriteReports
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        load_report_settings=load_report_settings_from_dict,
        build_catalog=build_catalog,
        merge_environments=merge_environments,
        write_reports=write_reports,
        init_logging=init_logging,
    )


def build_testing(*, spy: ReportSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    The site export readers stay real: they only read the folder a test
    points them at. Report writes go to a :class:`ReportSpy`.

    Args:
        spy: Optional ReportSpy instance for capturing report writes.
            When None, a fresh ReportSpy is created. Pass your own spy
            to assert on captured reports in tests.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        ReportSpy,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
    )

    report_spy = spy if spy is not None else ReportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        load_report_settings=load_report_settings_from_dict,
        build_catalog=build_catalog,
        merge_environments=merge_environments,
        write_reports=report_spy.write_reports,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "display_config",
    "load_report_settings_from_dict",
    # Site export
    "build_catalog",
    "merge_environments",
    # Reports
    "write_reports",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
