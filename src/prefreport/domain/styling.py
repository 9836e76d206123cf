"""Resolve spreadsheet formatting for every report cell.

The model here is writer-neutral: fonts, fills, borders and alignment are
plain value objects that a spreadsheet adapter translates into its own types.

Precedence, most specific wins:

1. header row styles (``header_row_font``/``header_row_fill``)
2. column styles: ``pref_cell_alignment`` on every cell of a value column,
   ``header_col_fill`` on data cells of a header column
3. baseline styles (``all_row_font``/``all_row_border``/``all_row_alignment``)

A style attribute is replaced as a whole by a more specific one; attributes
are never merged field by field.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from .table import Row, TableLayout


@dataclass(frozen=True, slots=True)
class Font:
    name: str | None = None
    size: float | None = None
    bold: bool = False
    italic: bool = False
    color: str | None = None


@dataclass(frozen=True, slots=True)
class Fill:
    """Solid or patterned background; colors are ARGB or RGB hex strings."""

    fg_color: str
    pattern: str = "solid"


@dataclass(frozen=True, slots=True)
class Border:
    """The same line applied to all four cell edges."""

    style: str = "thin"
    color: str | None = None


@dataclass(frozen=True, slots=True)
class Alignment:
    horizontal: str | None = None
    vertical: str | None = None
    wrap_text: bool = False


@dataclass(frozen=True, slots=True)
class CellStyle:
    font: Font | None = None
    fill: Fill | None = None
    border: Border | None = None
    alignment: Alignment | None = None


@dataclass(frozen=True, slots=True)
class ReportStyle:
    """Configured style directives; ``None`` means the directive is unset."""

    all_row_font: Font | None = None
    all_row_border: Border | None = None
    all_row_alignment: Alignment | None = None
    header_row_fill: Fill | None = None
    header_row_font: Font | None = None
    header_col_fill: Fill | None = None
    pref_cell_alignment: Alignment | None = None


@dataclass(frozen=True, slots=True)
class StyledCell:
    value: str
    style: CellStyle


StyledRow = tuple[StyledCell, ...]


def _baseline(style: ReportStyle) -> CellStyle:
    return CellStyle(font=style.all_row_font, border=style.all_row_border, alignment=style.all_row_alignment)


def _value_column_style(style: ReportStyle, layout: TableLayout, position: int) -> CellStyle:
    resolved = _baseline(style)
    if position in layout.col_values and style.pref_cell_alignment is not None:
        resolved = replace(resolved, alignment=style.pref_cell_alignment)
    return resolved


def _header_cell_style(style: ReportStyle, layout: TableLayout, position: int) -> CellStyle:
    resolved = _value_column_style(style, layout, position)
    if style.header_row_font is not None:
        resolved = replace(resolved, font=style.header_row_font)
    if style.header_row_fill is not None:
        resolved = replace(resolved, fill=style.header_row_fill)
    return resolved


def _data_cell_style(style: ReportStyle, layout: TableLayout, position: int) -> CellStyle:
    resolved = _value_column_style(style, layout, position)
    if position in layout.col_headers and style.header_col_fill is not None:
        resolved = replace(resolved, fill=style.header_col_fill)
    return resolved


def apply_styles(rows: Sequence[Row], layout: TableLayout, style: ReportStyle) -> list[StyledRow]:
    """Attach a resolved :class:`CellStyle` to every cell of ``rows``.

    ``rows[0]`` is treated as the header row. Styles are computed once per
    column, so every data row shares the same style objects.

    Example:
        >>> bold = Font(bold=True)
        >>> grey = Fill(fg_color="FFD9D9D9")
        >>> styled = apply_styles(
        ...     [("Scope", "Value"), ("global", "x")],
        ...     TableLayout(header_row=("Scope", "Value"), col_headers={}, col_values={}),
        ...     ReportStyle(header_row_font=bold, header_col_fill=grey),
        ... )
        >>> styled[0][0].style.font
        Font(name=None, size=None, bold=True, italic=False, color=None)
        >>> styled[1][0].style.fill is None
        True
    """
    if not rows:
        return []
    positions = range(1, layout.width + 1)
    header_styles = [_header_cell_style(style, layout, position) for position in positions]
    column_styles = [_data_cell_style(style, layout, position) for position in positions]
    styled: list[StyledRow] = [tuple(StyledCell(value, header_styles[index]) for index, value in enumerate(rows[0]))]
    for row in rows[1:]:
        styled.append(tuple(StyledCell(value, column_styles[index]) for index, value in enumerate(row)))
    return styled


__all__ = [
    "Alignment",
    "Border",
    "CellStyle",
    "Fill",
    "Font",
    "ReportStyle",
    "StyledCell",
    "StyledRow",
    "apply_styles",
]
