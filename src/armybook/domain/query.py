"""Read-only accessors over a loaded document."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import NotFound
from .models import Document, Unit, UpgradeOption


@dataclass(frozen=True, slots=True)
class UnitSummary:
    name: str
    type: str
    base_cost: int
    quality: int
    defense: int
    option_count: int


@dataclass(frozen=True, slots=True)
class OptionRef:
    """Flat ``(group, option)`` entry of a unit's upgrade menu."""

    group: str
    name: str
    cost: int
    mount: str | None = None


def list_units(document: Document) -> list[UnitSummary]:
    """Summaries of every unit, in document order."""

    return [
        UnitSummary(
            name=unit.name,
            type=unit.type,
            base_cost=unit.base_cost,
            quality=unit.quality,
            defense=unit.defense,
            option_count=sum(len(group.options) for group in unit.upgrade_groups),
        )
        for unit in document.units
    ]


def find_unit(document: Document, name: str) -> Unit:
    """Return the unit called ``name`` or raise :class:`NotFound`."""

    for unit in document.units:
        if unit.name == name:
            return unit
    raise NotFound("unit", name)


def list_options(unit: Unit) -> list[OptionRef]:
    """Every option of every group, in declaration order."""

    return [
        OptionRef(
            group=group.group,
            name=option.name,
            cost=option.cost,
            mount=option.mount.name if option.mount is not None else None,
        )
        for group in unit.upgrade_groups
        for option in group.options
    ]


def find_option(unit: Unit, group: str, name: str) -> UpgradeOption:
    upgrade_group = unit.group(group)
    if upgrade_group is None:
        raise NotFound("upgrade group", group)
    option = upgrade_group.option(name)
    if option is None:
        raise NotFound("option", f"{group}/{name}")
    return option
