"""Report settings model and loader.

Provides the ReportSettings Pydantic model: the validated, immutable value
object built once from the ``[report]`` configuration section and handed to
every stage of the analysis.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from prefreport.domain.enums import ColumnField
from prefreport.domain.errors import ConfigurationError
from prefreport.domain.sanitize import SanitizeRules
from prefreport.domain.styling import Alignment, Border, Fill, Font, ReportStyle
from prefreport.domain.table import DEFAULT_COL_HEADERS, DEFAULT_COL_VALUES, DEFAULT_HEADER_ROW, TableLayout

#: Report base names end up in file names; keep them to a portable alphabet.
REPORT_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_report_name(name: str) -> str:
    """Return ``name`` if it is usable as a report base name.

    Raises:
        ValueError: When the name is empty or contains characters other than
            letters, digits, ``-`` and ``_``.

    Examples:
        >>> validate_report_name("code-base")
        'code-base'
        >>> validate_report_name("../etc")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: report name may only contain letters, digits, '-' and '_': '../etc'
    """
    if not REPORT_NAME_PATTERN.fullmatch(name):
        raise ValueError(f"report name may only contain letters, digits, '-' and '_': {name!r}")
    return name


class _StyleModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FontModel(_StyleModel):
    name: str | None = None
    size: float | None = None
    bold: bool = False
    italic: bool = False
    color: str | None = None

    def to_domain(self) -> Font:
        return Font(name=self.name, size=self.size, bold=self.bold, italic=self.italic, color=self.color)


class FillModel(_StyleModel):
    fg_color: str
    pattern: str = "solid"

    def to_domain(self) -> Fill:
        return Fill(fg_color=self.fg_color, pattern=self.pattern)


class BorderModel(_StyleModel):
    style: str = "thin"
    color: str | None = None

    def to_domain(self) -> Border:
        return Border(style=self.style, color=self.color)


class AlignmentModel(_StyleModel):
    horizontal: str | None = None
    vertical: str | None = None
    wrap_text: bool = False

    def to_domain(self) -> Alignment:
        return Alignment(horizontal=self.horizontal, vertical=self.vertical, wrap_text=self.wrap_text)


class StyleSettings(BaseModel):
    """The ``[report.style]`` section; every directive is optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    all_row_font: FontModel | None = None
    all_row_border: BorderModel | None = None
    all_row_alignment: AlignmentModel | None = None
    header_row_fill: FillModel | None = None
    header_row_font: FontModel | None = None
    header_col_fill: FillModel | None = None
    pref_cell_alignment: AlignmentModel | None = None

    def to_report_style(self) -> ReportStyle:
        """Convert to the writer-neutral domain style.

        Example:
            >>> StyleSettings(header_row_font={"bold": True}).to_report_style().header_row_font.bold
            True
        """
        return ReportStyle(
            all_row_font=self.all_row_font.to_domain() if self.all_row_font else None,
            all_row_border=self.all_row_border.to_domain() if self.all_row_border else None,
            all_row_alignment=self.all_row_alignment.to_domain() if self.all_row_alignment else None,
            header_row_fill=self.header_row_fill.to_domain() if self.header_row_fill else None,
            header_row_font=self.header_row_font.to_domain() if self.header_row_font else None,
            header_col_fill=self.header_col_fill.to_domain() if self.header_col_fill else None,
            pref_cell_alignment=self.pref_cell_alignment.to_domain() if self.pref_cell_alignment else None,
        )


class LayoutSettings(BaseModel):
    """The ``[report.layout]`` section.

    ``col_headers`` and ``col_values`` map 1-based column positions to
    record fields. TOML table keys are strings; Pydantic coerces them to
    integers.

    Example:
        >>> layout = LayoutSettings(header_row=["Key", "Value"], col_headers={"1": "key"}, col_values={"2": "all"})
        >>> layout.to_layout().field_at(2)
        <ColumnField.ALL: 'all'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    header_row: list[str] = Field(default_factory=lambda: list(DEFAULT_HEADER_ROW))
    col_headers: dict[int, ColumnField] = Field(default_factory=lambda: dict(DEFAULT_COL_HEADERS))
    col_values: dict[int, ColumnField] = Field(default_factory=lambda: dict(DEFAULT_COL_VALUES))
    column_widths: dict[int, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_positions(self) -> LayoutSettings:
        """Reject layouts whose column mappings do not fit the header row."""
        layout = self.to_layout()
        for position, width in self.column_widths.items():
            if not 1 <= position <= layout.width:
                raise ValueError(f"column_widths position {position} is outside the header row (1..{layout.width})")
            if width <= 0:
                raise ValueError(f"column_widths[{position}] must be positive, got {width}")
        return self

    def to_layout(self) -> TableLayout:
        return TableLayout(
            header_row=tuple(self.header_row),
            col_headers=self.col_headers,
            col_values=self.col_values,
        )


class ReportSettings(BaseModel):
    """Validated, immutable report configuration.

    Example:
        >>> settings = ReportSettings(secure_preferences=["ApiSecret"], json_preferences="FeatureFlags")
        >>> sorted(settings.secure_preferences)
        ['ApiSecret']
        >>> sorted(settings.json_preferences)
        ['FeatureFlags']
        >>> settings.default_name
        'code-base'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_dir: Path = Path(".")
    default_folder: Path = Path("sites/site_template")
    default_name: str = "code-base"
    secure_preferences: frozenset[str] = frozenset()
    json_preferences: frozenset[str] = frozenset()
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    style: StyleSettings = Field(default_factory=StyleSettings)

    @field_validator("secure_preferences", "json_preferences", mode="before")
    @classmethod
    def _coerce_key_set(cls, v: Any) -> Any:
        """Coerce a single string from env/.env layers to a one-element set.

        Examples:
            >>> ReportSettings._coerce_key_set("ApiSecret")
            ['ApiSecret']
            >>> ReportSettings._coerce_key_set("  ")
            []
        """
        if isinstance(v, str):
            return [v.strip()] if v.strip() else []
        return v

    @field_validator("default_name")
    @classmethod
    def _check_default_name(cls, v: str) -> str:
        return validate_report_name(v)

    def sanitize_rules(self) -> SanitizeRules:
        return SanitizeRules(secure_preferences=self.secure_preferences, json_preferences=self.json_preferences)


def load_report_settings_from_dict(config_dict: Mapping[str, Any]) -> ReportSettings:
    """Load ReportSettings from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    ReportSettings model. Single-parse validation at the boundary.

    Args:
        config_dict: Configuration dictionary, typically ``Config.as_dict()``.
            Settings are read from its ``report`` section.

    Returns:
        Report settings with defaults for missing values.

    Raises:
        ConfigurationError: When the section is not a table or holds invalid values.

    Example:
        >>> settings = load_report_settings_from_dict({"report": {"default_name": "staging-audit"}})
        >>> settings.default_name
        'staging-audit'
        >>> load_report_settings_from_dict({}).layout.header_row[0]
        'Scope'
    """
    section: Any = config_dict.get("report", {})
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"[report] must be a table, got {type(section).__name__}")
    try:
        return ReportSettings.model_validate(dict(cast(Mapping[str, Any], section)))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [report] configuration: {exc}") from exc


__all__ = [
    "AlignmentModel",
    "BorderModel",
    "FillModel",
    "FontModel",
    "LayoutSettings",
    "REPORT_NAME_PATTERN",
    "ReportSettings",
    "StyleSettings",
    "load_report_settings_from_dict",
    "validate_report_name",
]
