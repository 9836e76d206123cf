"""Parse site export XML documents into typed preference declarations.

Each parse function validates the structure it reads and raises
:class:`~prefreport.domain.errors.MalformedDefinitionError` for the whole
file on the first problem, so callers can skip a bad file without keeping a
half-read result.

Element names are matched by local name; the export's namespace URIs vary
between platform releases.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from lxml import etree

from prefreport.domain.enums import InstanceType
from prefreport.domain.errors import MalformedDefinitionError
from prefreport.domain.matrix import GLOBAL_SCOPE, UNGROUPED, PreferenceDefinition

#: System object types whose attributes are preferences, mapped to the report scope.
PREFERENCE_SCOPES: Final[dict[str, str]] = {
    "OrganizationPreferences": GLOBAL_SCOPE,
    "SitePreferences": "SitePreferences",
}

#: Tier sections inside a preference value file.
TIER_ELEMENTS: Final[dict[str, InstanceType]] = {
    "all-instances": InstanceType.ALL,
    "development": InstanceType.DEVELOPMENT,
    "staging": InstanceType.STAGING,
    "production": InstanceType.PRODUCTION,
}

PREFERENCE_SECTIONS: Final[tuple[str, ...]] = ("custom-preferences", "standard-preferences")

#: Separator used to join the ``<value>`` entries of multi-valued preferences.
MULTI_VALUE_SEPARATOR: Final[str] = ":"

_XML_LANG: Final[str] = "{http://www.w3.org/XML/1998/namespace}lang"
_DEFAULT_LANG: Final[str] = "x-default"


@dataclass(frozen=True, slots=True)
class PreferenceValue:
    """One ``<preference>`` entry read from a tier section."""

    key: str
    instance_type: InstanceType
    value: str


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> Iterator[etree._Element]:
    for child in element:
        if isinstance(child.tag, str) and _local_name(child) == name:
            yield child


def _required(path: Path, element: etree._Element, attribute: str) -> str:
    value = (element.get(attribute) or "").strip()
    if not value:
        raise MalformedDefinitionError(path, f"<{_local_name(element)}> without {attribute} (line {element.sourceline})")
    return value


def _load(path: Path, expected_root: str) -> etree._Element:
    try:
        root = etree.parse(str(path), _parser()).getroot()
    except (etree.XMLSyntaxError, OSError) as exc:
        raise MalformedDefinitionError(path, f"unreadable XML: {exc}") from exc
    if _local_name(root) != expected_root:
        raise MalformedDefinitionError(path, f"expected <{expected_root}> root element, found <{_local_name(root)}>")
    return root


def _display_name(definition: etree._Element) -> str:
    names = list(_children(definition, "display-name"))
    for name in names:
        if name.get(_XML_LANG, _DEFAULT_LANG) == _DEFAULT_LANG:
            return (name.text or "").strip()
    return (names[0].text or "").strip() if names else ""


def _extension_definitions(path: Path, scope: str, extension: etree._Element) -> list[PreferenceDefinition]:
    display_names: dict[str, str] = {}
    for block in _children(extension, "custom-attribute-definitions"):
        for attribute in _children(block, "attribute-definition"):
            display_names[_required(path, attribute, "attribute-id")] = _display_name(attribute)

    definitions: list[PreferenceDefinition] = []
    grouped: set[str] = set()
    for block in _children(extension, "group-definitions"):
        for group in _children(block, "attribute-group"):
            group_id = _required(path, group, "group-id")
            for member in _children(group, "attribute"):
                key = _required(path, member, "attribute-id")
                grouped.add(key)
                definitions.append(PreferenceDefinition(scope, group_id, key, display_names.get(key, "")))

    definitions.extend(
        PreferenceDefinition(scope, UNGROUPED, key, name) for key, name in display_names.items() if key not in grouped
    )
    return definitions


def parse_metadata(path: Path) -> list[PreferenceDefinition]:
    """Read the preference attributes declared by a ``<metadata>`` document.

    Only type extensions listed in :data:`PREFERENCE_SCOPES` contribute.
    Grouped attributes come first in document order, followed by attribute
    definitions no group references (assigned to the ungrouped bucket).

    Args:
        path: Metadata XML file, typically ``meta/system-objecttype-extensions.xml``.

    Returns:
        Declared preferences in discovery order; empty when the file declares none.

    Raises:
        MalformedDefinitionError: When the file is not well-formed XML, has a
            different root element, or an element lacks its identifier.
    """
    root = _load(path, "metadata")
    definitions: list[PreferenceDefinition] = []
    for extension in _children(root, "type-extension"):
        scope = PREFERENCE_SCOPES.get(_required(path, extension, "type-id"))
        if scope is not None:
            definitions.extend(_extension_definitions(path, scope, extension))
    return definitions


def _preference_value(preference: etree._Element) -> str:
    values = list(_children(preference, "value"))
    if values:
        return MULTI_VALUE_SEPARATOR.join((value.text or "").strip() for value in values)
    return (preference.text or "").strip()


def parse_preference_values(path: Path) -> list[PreferenceValue]:
    """Read every tier value from a ``<preferences>`` document.

    Tier sections that are absent simply contribute nothing.

    Raises:
        MalformedDefinitionError: When the file is not well-formed XML, has a
            different root element, or a ``<preference>`` lacks ``preference-id``.
    """
    root = _load(path, "preferences")
    values: list[PreferenceValue] = []
    sections = [child for child in root if isinstance(child.tag, str) and _local_name(child) in PREFERENCE_SECTIONS]
    for section in sections:
        for tier in section:
            if not isinstance(tier.tag, str):
                continue
            instance_type = TIER_ELEMENTS.get(_local_name(tier))
            if instance_type is None:
                continue
            for preference in _children(tier, "preference"):
                key = _required(path, preference, "preference-id")
                values.append(PreferenceValue(key, instance_type, _preference_value(preference)))
    return values


__all__ = [
    "MULTI_VALUE_SEPARATOR",
    "PREFERENCE_SCOPES",
    "PREFERENCE_SECTIONS",
    "TIER_ELEMENTS",
    "PreferenceValue",
    "parse_metadata",
    "parse_preference_values",
]
