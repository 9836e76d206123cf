"""Analysis use case: turn a site export folder into a report.

Runs the pipeline stages in order (catalog, merge, sanitize, flatten, style)
and returns the assembled :class:`PreferenceReport`. Folder scanning is
delegated to injected ports so the use case never touches the filesystem
itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..domain.report import PreferenceReport
from ..domain.sanitize import sanitize_matrix
from ..domain.styling import apply_styles
from ..domain.table import flatten_matrix
from .ports import BuildCatalog, MergeEnvironments

if TYPE_CHECKING:
    from ..adapters.config.settings import ReportSettings

logger = logging.getLogger(__name__)


def analyze_site_export(
    folder: Path,
    settings: ReportSettings,
    *,
    build_catalog: BuildCatalog,
    merge_environments: MergeEnvironments,
) -> PreferenceReport:
    """Build the report for ``folder`` using ``settings``.

    Args:
        folder: Root of the site export.
        settings: Validated report configuration.
        build_catalog: Port producing the metadata-only matrix.
        merge_environments: Port merging tier values into the catalog.

    Returns:
        Report holding the sanitized matrix, its rows, and the styled rows.
    """
    catalog = build_catalog(folder)
    merged = merge_environments(folder, catalog)
    sanitized = sanitize_matrix(merged, settings.sanitize_rules())
    layout = settings.layout.to_layout()
    rows = flatten_matrix(sanitized, layout)
    styled_rows = apply_styles(rows, layout, settings.style.to_report_style())
    logger.info(
        "Site export analyzed",
        extra={"folder": str(folder), "scopes": sanitized.scopes, "preferences": len(sanitized)},
    )
    return PreferenceReport(
        matrix=sanitized,
        rows=rows,
        styled_rows=styled_rows,
        column_widths=dict(settings.layout.column_widths),
    )


__all__ = ["analyze_site_export"]
