"""Effective combat profile of a unit after applying a selection."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .costs import SelectedOption, Selection, check_selection
from .errors import ConflictingMounts
from .models import Mount, Unit, Weapon


@dataclass(frozen=True, slots=True)
class EffectiveProfile:
    """What a rules engine sees for one unit of an army list.

    ``special_rules`` keeps first-seen order: the unit's own rules, then the
    selected options in declaration order, then the mount.
    """

    unit: str
    type: str
    quality: int
    defense: int
    special_rules: tuple[str, ...]
    weapons: tuple[Weapon, ...]
    mounted: bool = False
    mount_name: str | None = None
    options: tuple[str, ...] = ()
    cost: int = 0


def active_mount(picks: Sequence[SelectedOption]) -> Mount | None:
    """Return the single selected mount, raising if more than one is picked."""

    mounted = [pick.option for pick in picks if pick.option.mount is not None]
    if len(mounted) > 1:
        raise ConflictingMounts([option.name for option in mounted])
    return mounted[0].mount if mounted else None


def _union(target: dict[str, None], tokens: Iterable[str]) -> None:
    for token in tokens:
        target.setdefault(token, None)


def resolve(unit: Unit, selection: Selection) -> EffectiveProfile:
    """Apply ``selection`` to ``unit``.

    Raises :class:`IllegalSelection` through the shared legality check and
    :class:`ConflictingMounts` when more than one mount is selected.
    """

    picks = check_selection(unit, selection)
    mount = active_mount(picks)

    rules: dict[str, None] = {}
    _union(rules, unit.special_rules)
    weapons: list[Weapon] = list(unit.weapons)
    for pick in picks:
        _union(rules, pick.option.special_rules)
        weapons.extend(pick.option.weapons)

    quality = unit.quality
    defense = unit.defense
    if mount is not None:
        _union(rules, mount.special_rules)
        weapons.extend(mount.weapons)
        if mount.quality is not None:
            quality = mount.quality
        if mount.defense is not None:
            defense = mount.defense

    return EffectiveProfile(
        unit=unit.name,
        type=unit.type,
        quality=quality,
        defense=defense,
        special_rules=tuple(rules),
        weapons=tuple(weapons),
        mounted=mount is not None,
        mount_name=mount.name if mount is not None else None,
        options=tuple(pick.option.name for pick in picks),
        cost=unit.base_cost + sum(pick.option.cost for pick in picks),
    )
