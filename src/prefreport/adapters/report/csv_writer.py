"""Tabular CSV report writer."""

from __future__ import annotations

import csv
from pathlib import Path

from prefreport.domain.report import PreferenceReport


def write_csv_report(report: PreferenceReport, path: Path) -> None:
    """Write the header row and one line per preference; spacer columns stay as empty fields."""
    with path.open("w", encoding="utf-8", newline="") as handle:
        csv.writer(handle).writerows(report.rows)


__all__ = ["write_csv_report"]
