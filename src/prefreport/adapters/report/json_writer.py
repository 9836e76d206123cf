"""Canonical JSON report writer."""

from __future__ import annotations

from pathlib import Path

import orjson

from prefreport.domain.report import PreferenceReport


def render_json_report(report: PreferenceReport) -> bytes:
    """Serialize the sanitized matrix with two-space indentation, insertion order kept.

    Example:
        >>> from prefreport.domain.matrix import PreferenceMatrix
        >>> render_json_report(PreferenceReport(PreferenceMatrix(), [("Key",)], []))
        b'{}\\n'
    """
    return orjson.dumps(report.matrix.as_dict(), option=orjson.OPT_INDENT_2) + b"\n"


def write_json_report(report: PreferenceReport, path: Path) -> None:
    path.write_bytes(render_json_report(report))


__all__ = ["render_json_report", "write_json_report"]
