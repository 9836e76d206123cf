"""Preference matrix: every known preference and its value per tier.

The matrix is an ordered ``scope -> group -> key -> record`` mapping. Every
level keeps first-discovery order so two runs over the same export produce
the same report, line for line.

Contents:
    * :class:`PreferenceDefinition` - declared identity and display name.
    * :class:`PreferenceRecord` - a definition plus one value per tier.
    * :class:`PreferenceMatrix` - the ordered, key-unique record collection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from .enums import InstanceType

GLOBAL_SCOPE = "global"
UNGROUPED = ""


def _empty_values() -> Mapping[InstanceType, str]:
    return MappingProxyType({instance_type: "" for instance_type in InstanceType})


@dataclass(frozen=True, slots=True)
class PreferenceDefinition:
    """Identity of a preference as declared in (or inferred from) the export.

    Example:
        >>> PreferenceDefinition("global", "standard", "ActiveLocales").display_name
        ''
    """

    scope: str
    group: str
    key: str
    display_name: str = ""


@dataclass(frozen=True, slots=True)
class PreferenceRecord:
    """A preference definition together with its value at every tier.

    ``values`` always holds all four :class:`InstanceType` slots; a tier
    without an override holds ``""``.

    Example:
        >>> record = PreferenceRecord(PreferenceDefinition("global", "", "InstanceTimezone"))
        >>> record.value(InstanceType.PRODUCTION)
        ''
        >>> record.with_value(InstanceType.ALL, "US/Eastern").value(InstanceType.ALL)
        'US/Eastern'
    """

    definition: PreferenceDefinition
    values: Mapping[InstanceType, str] = field(default_factory=_empty_values)

    def __post_init__(self) -> None:
        completed = {instance_type: self.values.get(instance_type, "") for instance_type in InstanceType}
        object.__setattr__(self, "values", MappingProxyType(completed))

    @property
    def scope(self) -> str:
        return self.definition.scope

    @property
    def group(self) -> str:
        return self.definition.group

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def display_name(self) -> str:
        return self.definition.display_name

    def value(self, instance_type: InstanceType) -> str:
        return self.values[instance_type]

    def with_value(self, instance_type: InstanceType, value: str) -> PreferenceRecord:
        """Return a copy with one tier replaced."""
        return self.with_values({**self.values, instance_type: value})

    def with_values(self, values: Mapping[InstanceType, str]) -> PreferenceRecord:
        """Return a copy carrying ``values``; tiers not given fall back to ``""``."""
        return replace(self, values=values)

    def to_report(self) -> dict[str, str]:
        """Render the record as its canonical JSON report entry.

        Example:
            >>> record = PreferenceRecord(PreferenceDefinition("global", "standard", "ActiveLocales"))
            >>> list(record.to_report())
            ['group', 'name', 'all-instances', 'development', 'staging', 'production']
        """
        entry = {"group": self.group, "name": self.display_name}
        for instance_type in InstanceType:
            entry[instance_type.report_field] = self.values[instance_type]
        return entry


class PreferenceMatrix:
    """Ordered collection of preference records keyed by scope, group and key.

    Records are immutable; the matrix swaps in updated copies so iteration
    order is never disturbed by an update.

    Example:
        >>> matrix = PreferenceMatrix()
        >>> _ = matrix.define(PreferenceDefinition("global", "standard", "ActiveLocales"))
        >>> matrix.assign("global", "ActiveLocales", InstanceType.ALL, "en:en_GB")
        >>> matrix.assign("global", "CustomCartridges", InstanceType.ALL, "app_storefront")
        >>> [(r.group, r.key) for r in matrix]
        [('standard', 'ActiveLocales'), ('', 'CustomCartridges')]
        >>> len(matrix)
        2
    """

    def __init__(self) -> None:
        self._scopes: dict[str, dict[str, dict[str, PreferenceRecord]]] = {}
        self._groups_by_key: dict[tuple[str, str], list[str]] = {}

    def __len__(self) -> int:
        return sum(len(keys) for groups in self._scopes.values() for keys in groups.values())

    def __iter__(self) -> Iterator[PreferenceRecord]:
        for groups in self._scopes.values():
            for keys in groups.values():
                yield from keys.values()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreferenceMatrix):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"PreferenceMatrix(scopes={list(self._scopes)!r}, records={len(self)})"

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    def get(self, scope: str, group: str, key: str) -> PreferenceRecord | None:
        return self._scopes.get(scope, {}).get(group, {}).get(key)

    def find(self, scope: str, key: str) -> list[PreferenceRecord]:
        """Return every record for ``key`` in ``scope``, across groups, in discovery order."""
        groups = self._groups_by_key.get((scope, key), [])
        return [self._scopes[scope][group][key] for group in groups]

    def define(self, definition: PreferenceDefinition) -> PreferenceRecord:
        """Register ``definition`` unless its ``(scope, group, key)`` is already known.

        The first declaration wins; a repeated one keeps the original record
        and position, with the display name filled in if it was still empty.
        """
        existing = self.get(definition.scope, definition.group, definition.key)
        if existing is not None:
            if not existing.display_name and definition.display_name:
                existing = replace(existing, definition=definition)
                self._store(existing)
            return existing
        record = PreferenceRecord(definition)
        self._store(record)
        self._groups_by_key.setdefault((definition.scope, definition.key), []).append(definition.group)
        return record

    def assign(self, scope: str, key: str, instance_type: InstanceType, value: str) -> None:
        """Set ``value`` for ``key`` at ``instance_type`` in every group that declares it.

        A key nobody declared is synthesized in the ungrouped bucket with an
        empty display name.
        """
        if not self.find(scope, key):
            self.define(PreferenceDefinition(scope, UNGROUPED, key))
        for record in self.find(scope, key):
            self._store(record.with_value(instance_type, value))

    def map_records(self, transform: Callable[[PreferenceRecord], PreferenceRecord]) -> PreferenceMatrix:
        """Return a new matrix with ``transform`` applied to every record, order preserved."""
        result = PreferenceMatrix()
        for record in self:
            updated = transform(record)
            result.define(updated.definition)
            result._store(updated)
        return result

    def as_dict(self) -> dict[str, dict[str, dict[str, dict[str, str]]]]:
        """Render the canonical nested report structure.

        Example:
            >>> PreferenceMatrix().as_dict()
            {}
        """
        return {
            scope: {group: {key: record.to_report() for key, record in keys.items()} for group, keys in groups.items()}
            for scope, groups in self._scopes.items()
        }

    def _store(self, record: PreferenceRecord) -> None:
        groups = self._scopes.setdefault(record.scope, {})
        groups.setdefault(record.group, {})[record.key] = record


__all__ = [
    "GLOBAL_SCOPE",
    "UNGROUPED",
    "PreferenceDefinition",
    "PreferenceMatrix",
    "PreferenceRecord",
]
