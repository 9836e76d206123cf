"""Report artifact writers (JSON, CSV, spreadsheet)."""

from __future__ import annotations

from .csv_writer import write_csv_report
from .json_writer import render_json_report, write_json_report
from .writer import REPORT_PREFIX, report_path, write_reports
from .xlsx_writer import SHEET_TITLE, build_workbook, write_xlsx_report

__all__ = [
    "REPORT_PREFIX",
    "SHEET_TITLE",
    "build_workbook",
    "render_json_report",
    "report_path",
    "write_csv_report",
    "write_json_report",
    "write_reports",
    "write_xlsx_report",
]
