"""Write every report artifact for one run.

Artifacts are written independently: a failure on one does not prevent the
others. All failures are collected and raised together once every writer has
run, so the caller learns both what failed and what was written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

from prefreport.domain.enums import ReportArtifact
from prefreport.domain.errors import ReportWriteError
from prefreport.domain.report import PreferenceReport

from .csv_writer import write_csv_report
from .json_writer import write_json_report
from .xlsx_writer import write_xlsx_report

logger = logging.getLogger(__name__)

REPORT_PREFIX: Final[str] = "report-"

ArtifactWriter = Callable[[PreferenceReport, Path], None]

WRITERS: Final[Mapping[ReportArtifact, ArtifactWriter]] = {
    ReportArtifact.JSON: write_json_report,
    ReportArtifact.CSV: write_csv_report,
    ReportArtifact.XLSX: write_xlsx_report,
}


def report_path(output_dir: Path, base_name: str, artifact: ReportArtifact) -> Path:
    """Return the file path of one artifact.

    Example:
        >>> report_path(Path("out"), "code-base", ReportArtifact.CSV).as_posix()
        'out/report-code-base.csv'
    """
    return output_dir / f"{REPORT_PREFIX}{base_name}.{artifact.value}"


def write_reports(report: PreferenceReport, *, output_dir: Path, base_name: str) -> list[Path]:
    """Write the JSON, CSV and spreadsheet reports into ``output_dir``.

    Args:
        report: The assembled report.
        output_dir: Target directory; created when missing.
        base_name: Report name used in every file name.

    Returns:
        Paths written, in artifact order.

    Raises:
        ReportWriteError: When the directory cannot be created or any artifact
            fails to write.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ReportWriteError({output_dir: str(exc)}) from exc

    written: list[Path] = []
    failures: dict[Path, str] = {}
    for artifact, writer in WRITERS.items():
        path = report_path(output_dir, base_name, artifact)
        try:
            writer(report, path)
        except (OSError, ValueError) as exc:
            logger.error("Failed to write report artifact", extra={"path": str(path), "error": str(exc)})
            failures[path] = str(exc)
            continue
        logger.info("Report artifact written", extra={"path": str(path), "artifact": artifact.value})
        written.append(path)

    if failures:
        raise ReportWriteError(failures, written)
    return written


__all__ = ["REPORT_PREFIX", "WRITERS", "report_path", "write_reports"]
