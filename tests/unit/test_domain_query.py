"""Tests for the read-only query accessors."""

from __future__ import annotations

import pytest
from factories import document, group, option, unit

from armybook.domain.errors import NotFound
from armybook.domain.loader import load
from armybook.domain.query import find_option, find_unit, list_options, list_units


def _document():
    mount = {"name": "Destrier", "special_rules": ["Rapide"]}
    groups = [
        group([option("Bouclier", 5), option("Lance", 10)], label="Équipement"),
        group([option("Destrier", 25, mount=mount)], label="Monture", type="one"),
    ]
    return load(
        document(
            unit("Zélote", base_cost=20, type="Infantry"),
            unit("Capitaine", upgrade_groups=groups),
            unit("Archer", base_cost=15),
        )
    )


def test_list_units_preserves_document_order():
    summaries = list_units(_document())
    assert [summary.name for summary in summaries] == ["Zélote", "Capitaine", "Archer"]
    assert summaries[0].type == "Infantry"
    assert summaries[0].base_cost == 20
    assert summaries[1].option_count == 3
    assert summaries[2].option_count == 0


def test_find_unit():
    assert find_unit(_document(), "Capitaine").name == "Capitaine"


def test_find_unit_is_exact():
    with pytest.raises(NotFound) as excinfo:
        find_unit(_document(), "capitaine")
    assert excinfo.value.kind == "unit"
    assert excinfo.value.name == "capitaine"


def test_not_found_is_a_lookup_error():
    with pytest.raises(LookupError):
        find_unit(_document(), "Personne")


def test_list_options_flattens_groups_in_order():
    captain = find_unit(_document(), "Capitaine")
    refs = list_options(captain)

    assert [(ref.group, ref.name, ref.cost) for ref in refs] == [
        ("Équipement", "Bouclier", 5),
        ("Équipement", "Lance", 10),
        ("Monture", "Destrier", 25),
    ]
    assert refs[0].mount is None
    assert refs[2].mount == "Destrier"


def test_list_options_of_unit_without_groups():
    assert list_options(find_unit(_document(), "Archer")) == []


def test_find_option():
    captain = find_unit(_document(), "Capitaine")
    assert find_option(captain, "Monture", "Destrier").cost == 25
    with pytest.raises(NotFound):
        find_option(captain, "Monture", "Char")
    with pytest.raises(NotFound):
        find_option(captain, "Armes", "Lance")
