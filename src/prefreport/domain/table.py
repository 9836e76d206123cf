"""Flatten the preference matrix into ordered report rows.

Column positions are 1-based, matching spreadsheet column numbering. A
position mapped by neither ``col_headers`` nor ``col_values`` is a spacer and
always renders as ``""``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import ColumnField
from .matrix import PreferenceMatrix, PreferenceRecord

Row = tuple[str, ...]

DEFAULT_HEADER_ROW: tuple[str, ...] = (
    "Scope",
    "Group",
    "",
    "Preference",
    "",
    "All Instances",
    "Development",
    "Staging",
    "Production",
)
DEFAULT_COL_HEADERS: Mapping[int, ColumnField] = MappingProxyType(
    {1: ColumnField.SCOPE, 2: ColumnField.GROUP, 4: ColumnField.KEY}
)
DEFAULT_COL_VALUES: Mapping[int, ColumnField] = MappingProxyType(
    {6: ColumnField.ALL, 7: ColumnField.DEVELOPMENT, 8: ColumnField.STAGING, 9: ColumnField.PRODUCTION}
)


@dataclass(frozen=True, slots=True)
class TableLayout:
    """Column layout of the tabular report.

    Raises:
        ValueError: When a mapped position falls outside the header row or is
            mapped by both ``col_headers`` and ``col_values``.

    Example:
        >>> layout = TableLayout()
        >>> layout.width
        9
        >>> layout.field_at(3) is None
        True
        >>> TableLayout(header_row=("Key",), col_headers={2: ColumnField.KEY})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: col_headers position 2 is outside the header row (1..1)
    """

    header_row: tuple[str, ...] = DEFAULT_HEADER_ROW
    col_headers: Mapping[int, ColumnField] = field(default_factory=lambda: dict(DEFAULT_COL_HEADERS))
    col_values: Mapping[int, ColumnField] = field(default_factory=lambda: dict(DEFAULT_COL_VALUES))

    def __post_init__(self) -> None:
        object.__setattr__(self, "header_row", tuple(self.header_row))
        for name, mapping in (("col_headers", self.col_headers), ("col_values", self.col_values)):
            for position in mapping:
                if not 1 <= position <= self.width:
                    raise ValueError(f"{name} position {position} is outside the header row (1..{self.width})")
        overlap = sorted(set(self.col_headers) & set(self.col_values))
        if overlap:
            raise ValueError(f"column positions {overlap} are mapped by both col_headers and col_values")
        object.__setattr__(self, "col_headers", MappingProxyType(dict(sorted(self.col_headers.items()))))
        object.__setattr__(self, "col_values", MappingProxyType(dict(sorted(self.col_values.items()))))

    @property
    def width(self) -> int:
        return len(self.header_row)

    def field_at(self, position: int) -> ColumnField | None:
        """Return the field bound to a 1-based column, ``None`` for spacers."""
        return self.col_headers.get(position) or self.col_values.get(position)


def resolve_cell(record: PreferenceRecord, column: ColumnField | None) -> str:
    """Evaluate one column binding against ``record``."""
    if column is None:
        return ""
    instance_type = column.instance_type
    if instance_type is not None:
        return record.value(instance_type)
    if column is ColumnField.SCOPE:
        return record.scope
    if column is ColumnField.GROUP:
        return record.group
    if column is ColumnField.KEY:
        return record.key
    return record.display_name


def flatten_matrix(matrix: PreferenceMatrix, layout: TableLayout) -> list[Row]:
    """Return the header row followed by one row per record, in matrix order.

    Example:
        >>> from prefreport.domain.enums import InstanceType
        >>> matrix = PreferenceMatrix()
        >>> matrix.assign("global", "InstanceTimezone", InstanceType.ALL, "US/Eastern")
        >>> rows = flatten_matrix(matrix, TableLayout())
        >>> rows[1]
        ('global', '', '', 'InstanceTimezone', '', 'US/Eastern', '', '', '')
    """
    columns = [layout.field_at(position) for position in range(1, layout.width + 1)]
    rows: list[Row] = [layout.header_row]
    rows.extend(tuple(resolve_cell(record, column) for column in columns) for record in matrix)
    return rows


__all__ = [
    "DEFAULT_COL_HEADERS",
    "DEFAULT_COL_VALUES",
    "DEFAULT_HEADER_ROW",
    "Row",
    "TableLayout",
    "flatten_matrix",
    "resolve_cell",
]
