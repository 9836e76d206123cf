"""Preference matrix tests: definition, assignment, ordering, rendering."""

from __future__ import annotations

import pytest

from prefreport.domain.enums import InstanceType
from prefreport.domain.matrix import UNGROUPED, PreferenceDefinition, PreferenceMatrix, PreferenceRecord


def _matrix_with(*definitions: PreferenceDefinition) -> PreferenceMatrix:
    matrix = PreferenceMatrix()
    for definition in definitions:
        matrix.define(definition)
    return matrix


# ======================== PreferenceRecord ========================


@pytest.mark.os_agnostic
def test_record_always_holds_every_tier() -> None:
    record = PreferenceRecord(PreferenceDefinition("global", "", "A"), {InstanceType.STAGING: "x"})

    assert set(record.values) == set(InstanceType)
    assert record.value(InstanceType.STAGING) == "x"
    assert record.value(InstanceType.PRODUCTION) == ""


@pytest.mark.os_agnostic
def test_record_with_value_leaves_original_untouched() -> None:
    record = PreferenceRecord(PreferenceDefinition("global", "", "A"))

    updated = record.with_value(InstanceType.ALL, "1")

    assert record.value(InstanceType.ALL) == ""
    assert updated.value(InstanceType.ALL) == "1"


@pytest.mark.os_agnostic
def test_record_report_entry_uses_canonical_field_names() -> None:
    record = PreferenceRecord(PreferenceDefinition("global", "standard", "ActiveLocales", "Active Locales"))

    assert record.with_value(InstanceType.ALL, "en").to_report() == {
        "group": "standard",
        "name": "Active Locales",
        "all-instances": "en",
        "development": "",
        "staging": "",
        "production": "",
    }


# ======================== define ========================


@pytest.mark.os_agnostic
def test_define_keeps_first_discovery_order_at_every_level() -> None:
    matrix = _matrix_with(
        PreferenceDefinition("global", "zeta", "B"),
        PreferenceDefinition("SitePreferences", "alpha", "A"),
        PreferenceDefinition("global", "alpha", "Z"),
        PreferenceDefinition("global", "zeta", "A"),
    )

    assert matrix.scopes == ["global", "SitePreferences"]
    assert [(r.scope, r.group, r.key) for r in matrix] == [
        ("global", "zeta", "B"),
        ("global", "zeta", "A"),
        ("global", "alpha", "Z"),
        ("SitePreferences", "alpha", "A"),
    ]


@pytest.mark.os_agnostic
def test_define_twice_keeps_one_record_and_its_position() -> None:
    matrix = _matrix_with(
        PreferenceDefinition("global", "g", "A"),
        PreferenceDefinition("global", "g", "B"),
        PreferenceDefinition("global", "g", "A"),
    )

    assert [r.key for r in matrix] == ["A", "B"]


@pytest.mark.os_agnostic
def test_define_fills_in_a_missing_display_name() -> None:
    matrix = _matrix_with(
        PreferenceDefinition("global", "g", "A"),
        PreferenceDefinition("global", "g", "A", "Alpha"),
        PreferenceDefinition("global", "g", "A", "Other"),
    )

    record = matrix.get("global", "g", "A")

    assert record is not None
    assert record.display_name == "Alpha"


@pytest.mark.os_agnostic
def test_same_key_in_two_groups_is_two_records() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "a", "K"), PreferenceDefinition("global", "b", "K"))

    assert [r.group for r in matrix.find("global", "K")] == ["a", "b"]
    assert len(matrix) == 2


# ======================== assign ========================


@pytest.mark.os_agnostic
def test_assign_sets_value_on_declared_record() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "standard", "ActiveLocales"))

    matrix.assign("global", "ActiveLocales", InstanceType.DEVELOPMENT, "en")

    record = matrix.get("global", "standard", "ActiveLocales")
    assert record is not None
    assert record.value(InstanceType.DEVELOPMENT) == "en"
    assert len(matrix) == 1


@pytest.mark.os_agnostic
def test_assign_updates_every_group_declaring_the_key() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "a", "K"), PreferenceDefinition("global", "b", "K"))

    matrix.assign("global", "K", InstanceType.ALL, "v")

    assert [r.value(InstanceType.ALL) for r in matrix] == ["v", "v"]


@pytest.mark.os_agnostic
def test_assign_synthesizes_undeclared_key_in_ungrouped_bucket() -> None:
    matrix = PreferenceMatrix()

    matrix.assign("global", "InstanceTimezone", InstanceType.ALL, "US/Eastern")

    record = matrix.get("global", UNGROUPED, "InstanceTimezone")
    assert record is not None
    assert record.display_name == ""
    assert record.value(InstanceType.ALL) == "US/Eastern"


@pytest.mark.os_agnostic
def test_assign_does_not_move_existing_records() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "g", "A"), PreferenceDefinition("global", "g", "B"))

    matrix.assign("global", "A", InstanceType.PRODUCTION, "p")

    assert [r.key for r in matrix] == ["A", "B"]


@pytest.mark.os_agnostic
def test_assign_is_idempotent() -> None:
    once = PreferenceMatrix()
    twice = PreferenceMatrix()
    once.assign("global", "A", InstanceType.ALL, "v")
    twice.assign("global", "A", InstanceType.ALL, "v")
    twice.assign("global", "A", InstanceType.ALL, "v")

    assert once == twice


# ======================== map_records / as_dict ========================


@pytest.mark.os_agnostic
def test_map_records_returns_new_matrix_in_same_order() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "g", "A"), PreferenceDefinition("global", "", "B"))

    upper = matrix.map_records(lambda r: r.with_value(InstanceType.ALL, r.key.lower()))

    assert upper is not matrix
    assert [r.value(InstanceType.ALL) for r in upper] == ["a", "b"]
    assert [r.value(InstanceType.ALL) for r in matrix] == ["", ""]


@pytest.mark.os_agnostic
def test_as_dict_nests_scope_group_key() -> None:
    matrix = _matrix_with(PreferenceDefinition("global", "standard", "ActiveLocales"))
    matrix.assign("SitePreferences", "Custom", InstanceType.STAGING, "s")

    rendered = matrix.as_dict()

    assert list(rendered) == ["global", "SitePreferences"]
    assert rendered["global"]["standard"]["ActiveLocales"]["all-instances"] == ""
    assert rendered["SitePreferences"][""]["Custom"]["staging"] == "s"


@pytest.mark.os_agnostic
def test_empty_matrix_renders_as_empty_dict() -> None:
    assert PreferenceMatrix().as_dict() == {}
    assert len(PreferenceMatrix()) == 0


@pytest.mark.os_agnostic
def test_matrix_is_not_equal_to_other_types() -> None:
    assert PreferenceMatrix() != {}
