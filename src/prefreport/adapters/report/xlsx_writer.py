"""Styled spreadsheet report writer built on openpyxl.

Translates the writer-neutral :mod:`prefreport.domain.styling` model into
openpyxl style objects. Style objects are converted once per distinct
:class:`CellStyle` and shared between cells.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.styles import Alignment as XlAlignment
from openpyxl.styles import Border as XlBorder
from openpyxl.styles import Font as XlFont
from openpyxl.styles import PatternFill, Side
from openpyxl.utils import get_column_letter

from prefreport.domain.report import PreferenceReport
from prefreport.domain.styling import Alignment, Border, CellStyle, Fill, Font

logger = logging.getLogger(__name__)

SHEET_TITLE: Final[str] = "Preferences"


def _font(font: Font) -> XlFont:
    return XlFont(name=font.name, size=font.size, bold=font.bold, italic=font.italic, color=font.color)


def _fill(fill: Fill) -> PatternFill:
    return PatternFill(fill_type=fill.pattern, fgColor=fill.fg_color, bgColor=fill.fg_color)


def _border(border: Border) -> XlBorder:
    side = Side(style=border.style, color=border.color)
    return XlBorder(left=side, right=side, top=side, bottom=side)


def _alignment(alignment: Alignment) -> XlAlignment:
    return XlAlignment(horizontal=alignment.horizontal, vertical=alignment.vertical, wrap_text=alignment.wrap_text)


class _StyleCache:
    def __init__(self) -> None:
        self._converted: dict[CellStyle, dict[str, object]] = {}

    def apply(self, cell: Cell, style: CellStyle) -> None:
        attributes = self._converted.get(style)
        if attributes is None:
            attributes = {}
            if style.font is not None:
                attributes["font"] = _font(style.font)
            if style.fill is not None:
                attributes["fill"] = _fill(style.fill)
            if style.border is not None:
                attributes["border"] = _border(style.border)
            if style.alignment is not None:
                attributes["alignment"] = _alignment(style.alignment)
            self._converted[style] = attributes
        for name, value in attributes.items():
            setattr(cell, name, value)


def _set_text(cell: Cell, value: str) -> None:
    if not value:
        return
    cleaned = ILLEGAL_CHARACTERS_RE.sub("", value)
    if cleaned != value:
        logger.warning(
            "Removed control characters the spreadsheet cannot hold",
            extra={"row": cell.row, "column": cell.column, "removed": len(value) - len(cleaned)},
        )
    cell.value = cleaned
    # preference values are text, never formulas
    cell.data_type = "s"


def build_workbook(report: PreferenceReport) -> Workbook:
    """Lay out the styled rows on a single sheet with a frozen header row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    styles = _StyleCache()
    for row_index, row in enumerate(report.styled_rows, start=1):
        for column_index, styled in enumerate(row, start=1):
            cell = sheet.cell(row=row_index, column=column_index)
            _set_text(cell, styled.value)
            styles.apply(cell, styled.style)
    sheet.freeze_panes = "A2"
    for position, width in sorted(report.column_widths.items()):
        sheet.column_dimensions[get_column_letter(position)].width = width
    return workbook


def write_xlsx_report(report: PreferenceReport, path: Path) -> None:
    build_workbook(report).save(path)


__all__ = ["SHEET_TITLE", "build_workbook", "write_xlsx_report"]
