"""In-memory report writer for testing.

Contents:
    * :class:`ReportSpy` - Captures write requests for test assertions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ...domain.enums import ReportArtifact
from ...domain.errors import ReportWriteError
from ...domain.report import PreferenceReport
from ..report.writer import report_path


@dataclass(frozen=True, slots=True)
class CapturedReport:
    report: PreferenceReport
    output_dir: Path
    base_name: str


def _empty_capture_list() -> list[CapturedReport]:
    return []


@dataclass
class ReportSpy:
    """Captures report writes without touching the filesystem.

    Each test should create its own ReportSpy instance to avoid cross-test
    pollution. :meth:`write_reports` matches the ``WriteReports`` protocol.

    Attributes:
        written: Captured write requests, oldest first.
        fail_artifacts: Artifacts whose write should be reported as failed.

    Example:
        >>> from prefreport.domain.matrix import PreferenceMatrix
        >>> spy = ReportSpy()
        >>> report = PreferenceReport(PreferenceMatrix(), [("Key",)], [])
        >>> [p.name for p in spy.write_reports(report, output_dir=Path("out"), base_name="demo")]
        ['report-demo.json', 'report-demo.csv', 'report-demo.xlsx']
        >>> spy.last.base_name
        'demo'
    """

    written: list[CapturedReport] = field(default_factory=_empty_capture_list)
    fail_artifacts: frozenset[ReportArtifact] = frozenset()

    @property
    def last(self) -> CapturedReport:
        return self.written[-1]

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.written.clear()

    def write_reports(self, report: PreferenceReport, *, output_dir: Path, base_name: str) -> list[Path]:
        """Record the request and return the paths the real writer would produce.

        Raises:
            ReportWriteError: When ``fail_artifacts`` names any artifact.
        """
        self.written.append(CapturedReport(report, output_dir, base_name))
        paths = [report_path(output_dir, base_name, artifact) for artifact in ReportArtifact]
        failures = {
            report_path(output_dir, base_name, artifact): "simulated failure" for artifact in self.fail_artifacts
        }
        if failures:
            raise ReportWriteError(failures, [path for path in paths if path not in failures])
        return paths


__all__ = ["CapturedReport", "ReportSpy"]
