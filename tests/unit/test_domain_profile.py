"""Tests for the effective profile resolver."""

from __future__ import annotations

import pytest
from factories import document, group, option, unit, weapon

from armybook.domain.errors import ConflictingMounts, IllegalSelection
from armybook.domain.loader import load
from armybook.domain.profile import resolve


def _champion():
    options = [
        option("Bannière", 10, special_rules=["Héros", "Aura de peur"]),
        option("Arc", 5, weapons=[weapon(name="Arc", range=24, attacks=1)]),
        option(
            "Pégase",
            60,
            mount={
                "name": "Pégase",
                "special_rules": ["Vol", "Rapide"],
                "defense": 3,
                "weapons": [weapon(name="Sabots", attacks=2)],
            },
        ),
        option("Dragon", 200, mount={"name": "Dragon", "special_rules": ["Vol", "Peur"]}),
    ]
    data = document(
        unit(
            special_rules=["Héros", "Coriace (3)"],
            weapons=[weapon(name="Épée")],
            upgrade_groups=[group(options)],
        )
    )
    return load(data).units[0]


def test_empty_selection_matches_intrinsic_profile():
    champion = _champion()
    profile = resolve(champion, {})

    assert profile.unit == champion.name
    assert profile.quality == champion.quality
    assert profile.defense == champion.defense
    assert profile.special_rules == champion.special_rules
    assert profile.weapons == champion.weapons
    assert profile.mounted is False
    assert profile.mount_name is None
    assert profile.options == ()
    assert profile.cost == champion.base_cost


def test_option_rules_are_unioned_without_duplicates():
    profile = resolve(_champion(), {"Option": ["Bannière"]})
    assert profile.special_rules == ("Héros", "Coriace (3)", "Aura de peur")


def test_option_weapons_are_appended():
    profile = resolve(_champion(), {"Option": ["Arc"]})
    assert [w.name for w in profile.weapons] == ["Épée", "Arc"]
    assert profile.weapons[1].range == 24


def test_mount_converts_profile():
    profile = resolve(_champion(), {"Option": ["Pégase", "Bannière"]})

    assert profile.mounted is True
    assert profile.mount_name == "Pégase"
    assert profile.special_rules == ("Héros", "Coriace (3)", "Aura de peur", "Vol", "Rapide")
    assert [w.name for w in profile.weapons] == ["Épée", "Sabots"]
    assert profile.defense == 3
    assert profile.quality == 4
    assert profile.options == ("Bannière", "Pégase")
    assert profile.cost == 50 + 10 + 60


def test_mount_without_stats_keeps_rider_stats():
    profile = resolve(_champion(), {"Option": ["Dragon"]})
    assert profile.quality == 4
    assert profile.defense == 4
    assert profile.mount_name == "Dragon"


def test_two_mounts_conflict():
    with pytest.raises(ConflictingMounts) as excinfo:
        resolve(_champion(), {"Option": ["Dragon", "Pégase"]})
    assert excinfo.value.options == ("Pégase", "Dragon")


def test_repeated_mount_in_one_or_more_group_conflicts():
    mount = {"name": "Loup", "special_rules": ["Rapide"]}
    groups = [group([option("Loup", 20, mount=mount)], type="one_or_more")]
    champion = load(document(unit(upgrade_groups=groups))).units[0]

    with pytest.raises(ConflictingMounts):
        resolve(champion, {"Option": ["Loup", "Loup"]})


def test_illegal_selection_is_reported():
    with pytest.raises(IllegalSelection):
        resolve(_champion(), {"Option": ["Arc", "Arc"]})


def test_resolution_is_idempotent_and_order_independent():
    champion = _champion()
    first = resolve(champion, {"Option": ["Pégase", "Arc", "Bannière"]})
    second = resolve(champion, {"Option": ["Bannière", "Pégase", "Arc"]})
    assert first == second
    assert resolve(champion, {"Option": ["Pégase", "Arc", "Bannière"]}) == first


def test_resolution_does_not_mutate_unit():
    champion = _champion()
    before = (champion.special_rules, champion.weapons)
    resolve(champion, {"Option": ["Pégase", "Arc", "Bannière"]})
    assert (champion.special_rules, champion.weapons) == before
