"""Immutable entity model for a faction army book.

The loader builds these dataclasses from the validated document tree; all
other domain functions only ever read them.  Sequences are tuples so a
loaded document cannot be mutated by a consumer.

``extra`` holds keys the loader did not recognise.  They carry no meaning
for the toolkit but are written back by :func:`armybook.domain.loader.dump`.
It is a read-only mapping and takes no part in hashing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .enums import SelectorType


def _no_extra() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Weapon:
    """Weapon profile.  ``range`` is ``None`` for melee weapons."""

    name: str
    range: int | None
    attacks: int
    armor_piercing: int = 0
    special_rules: tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)

    @property
    def is_melee(self) -> bool:
        return self.range is None


@dataclass(frozen=True, slots=True)
class Mount:
    """Creature or vehicle carrying the unit.

    ``quality``, ``defense`` and ``weapons`` are optional; when absent the
    rider keeps its own values.
    """

    name: str
    special_rules: tuple[str, ...] = ()
    quality: int | None = None
    defense: int | None = None
    weapons: tuple[Weapon, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)


@dataclass(frozen=True, slots=True)
class UpgradeOption:
    """One entry of an upgrade group."""

    name: str
    cost: int
    special_rules: tuple[str, ...] = ()
    weapons: tuple[Weapon, ...] = ()
    mount: Mount | None = None
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)

    @property
    def has_mount(self) -> bool:
        return self.mount is not None


@dataclass(frozen=True, slots=True)
class UpgradeGroup:
    """A menu of options sharing a cardinality constraint."""

    group: str
    type: SelectorType
    options: tuple[UpgradeOption, ...]
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)

    def option(self, name: str) -> UpgradeOption | None:
        for option in self.options:
            if option.name == name:
                return option
        return None


@dataclass(frozen=True, slots=True)
class Unit:
    """Unit entry with its statistics and upgrade menu."""

    name: str
    type: str
    base_cost: int
    quality: int
    defense: int
    weapons: tuple[Weapon, ...]
    special_rules: tuple[str, ...] = ()
    upgrade_groups: tuple[UpgradeGroup, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)

    def group(self, label: str) -> UpgradeGroup | None:
        for group in self.upgrade_groups:
            if group.group == label:
                return group
        return None


@dataclass(frozen=True, slots=True)
class Document:
    """A faction army book."""

    faction: str
    game: str
    units: tuple[Unit, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=_no_extra, hash=False)
