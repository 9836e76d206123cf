"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when the ``[report]`` section cannot be turned into valid report
    settings. Caught at the CLI boundary and mapped to ``EX_CONFIG``.

    Example:
        >>> err = ConfigurationError("column 12 is outside the header row")
        >>> str(err)
        'column 12 is outside the header row'
    """


class MalformedDefinitionError(ValueError):
    """A metadata or preference file in the site export has an unexpected shape.

    Carries the offending path so the analysis can skip the file and report
    which one was ignored.

    Example:
        >>> err = MalformedDefinitionError(Path("meta/system.xml"), "missing attribute-id")
        >>> err.path.name
        'system.xml'
        >>> str(err)
        'meta/system.xml: missing attribute-id'
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path.as_posix()}: {reason}")
        self.path = path
        self.reason = reason


class ReportWriteError(Exception):
    """One or more report artifacts could not be persisted.

    Attributes:
        failures: Mapping of artifact path to the failure message.
        written: Artifacts that were written successfully despite the failures.

    Example:
        >>> err = ReportWriteError({Path("out/report-x.csv"): "Permission denied"}, [Path("out/report-x.json")])
        >>> str(err)
        'Failed to write out/report-x.csv: Permission denied'
        >>> [p.name for p in err.written]
        ['report-x.json']
    """

    def __init__(self, failures: Mapping[Path, str], written: Sequence[Path] = ()) -> None:
        detail = "; ".join(f"{path.as_posix()}: {message}" for path, message in failures.items())
        super().__init__(f"Failed to write {detail}")
        self.failures = dict(failures)
        self.written = list(written)


__all__ = [
    "ConfigurationError",
    "MalformedDefinitionError",
    "ReportWriteError",
]
