"""The assembled report handed to the artifact writers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .matrix import PreferenceMatrix
from .styling import StyledRow
from .table import Row


@dataclass(frozen=True, slots=True)
class PreferenceReport:
    """Everything one run produces, ready for serialization.

    Attributes:
        matrix: The sanitized matrix; source of the canonical JSON report.
        rows: Flattened table, header row first; source of the CSV report.
        styled_rows: ``rows`` with resolved cell styles; source of the spreadsheet.
        column_widths: Optional spreadsheet widths per 1-based column.
    """

    matrix: PreferenceMatrix
    rows: list[Row]
    styled_rows: list[StyledRow]
    column_widths: Mapping[int, float] = field(default_factory=dict)

    @property
    def preference_count(self) -> int:
        return len(self.rows) - 1


__all__ = ["PreferenceReport"]
