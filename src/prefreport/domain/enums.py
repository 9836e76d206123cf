"""Type-safe domain enums for tiers, table columns, and output formats."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class InstanceType(str, Enum):
    """Deployment tiers a preference value can be set for.

    ``ALL`` is the shared baseline; the remaining members are optional
    per-environment overrides.

    Example:
        >>> [t.value for t in InstanceType]
        ['all', 'development', 'staging', 'production']
        >>> InstanceType.ALL.report_field
        'all-instances'
        >>> InstanceType.STAGING.report_field
        'staging'
    """

    ALL = "all"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def report_field(self) -> str:
        """Field name used for this tier in the canonical JSON report."""
        if self is InstanceType.ALL:
            return "all-instances"
        return self.value


class ColumnField(str, Enum):
    """Record fields a report column can be bound to.

    Metadata members resolve to the record's definition; tier members resolve
    to the value stored for that :class:`InstanceType`.

    Example:
        >>> ColumnField("display_name") is ColumnField.DISPLAY_NAME
        True
        >>> ColumnField.STAGING.instance_type
        <InstanceType.STAGING: 'staging'>
        >>> ColumnField.KEY.instance_type is None
        True
    """

    SCOPE = "scope"
    GROUP = "group"
    KEY = "key"
    DISPLAY_NAME = "display_name"
    ALL = "all"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def instance_type(self) -> InstanceType | None:
        """Return the tier this column reads, or ``None`` for metadata columns."""
        try:
            return InstanceType(self.value)
        except ValueError:
            return None


class ReportArtifact(str, Enum):
    """Report files produced by one analysis run.

    The value doubles as the file extension.

    Example:
        >>> ReportArtifact.XLSX.value
        'xlsx'
    """

    JSON = "json"
    CSV = "csv"
    XLSX = "xlsx"


__all__ = [
    "ColumnField",
    "InstanceType",
    "OutputFormat",
    "ReportArtifact",
]
