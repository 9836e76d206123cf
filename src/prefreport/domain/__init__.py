"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the preference matrix and the transformations applied to it before
a report is written.

Contents:
    * :mod:`.enums` - Domain enumerations (InstanceType, ColumnField, ...)
    * :mod:`.errors` - Domain exception types
    * :mod:`.matrix` - Preference definitions, records, and the matrix
    * :mod:`.sanitize` - Redaction and JSON beautification
    * :mod:`.table` - Column layout and row flattening
    * :mod:`.styling` - Cell style resolution for spreadsheet output
    * :mod:`.report` - The assembled report handed to writers
"""

from __future__ import annotations

from .enums import ColumnField, InstanceType, OutputFormat, ReportArtifact
from .errors import ConfigurationError, MalformedDefinitionError, ReportWriteError
from .matrix import GLOBAL_SCOPE, UNGROUPED, PreferenceDefinition, PreferenceMatrix, PreferenceRecord
from .report import PreferenceReport
from .sanitize import REDACTION_MARKER, SanitizeRules, beautify_json, sanitize_matrix
from .styling import Alignment, Border, CellStyle, Fill, Font, ReportStyle, StyledCell, StyledRow, apply_styles
from .table import Row, TableLayout, flatten_matrix

__all__ = [
    # Enums
    "ColumnField",
    "InstanceType",
    "OutputFormat",
    "ReportArtifact",
    # Errors
    "ConfigurationError",
    "MalformedDefinitionError",
    "ReportWriteError",
    # Matrix
    "GLOBAL_SCOPE",
    "UNGROUPED",
    "PreferenceDefinition",
    "PreferenceMatrix",
    "PreferenceRecord",
    # Report
    "PreferenceReport",
    # Sanitizing
    "REDACTION_MARKER",
    "SanitizeRules",
    "beautify_json",
    "sanitize_matrix",
    # Table
    "Row",
    "TableLayout",
    "flatten_matrix",
    # Styling
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
