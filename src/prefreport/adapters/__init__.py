"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (CLI, configuration, site exports, report files,
logging).

Contents:
    * :mod:`.config` - Configuration loading, display, and report settings
    * :mod:`.site_export` - Site export discovery and XML parsing
    * :mod:`.report` - JSON, CSV, and spreadsheet report writers
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
