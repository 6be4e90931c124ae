"""Selection legality and point cost aggregation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .errors import IllegalSelection
from .models import Document, Unit, UpgradeGroup, UpgradeOption
from .query import find_unit

Selection = Mapping[str, Sequence[str]]
"""Upgrade group label -> names of the options chosen in that group."""


@dataclass(frozen=True, slots=True)
class SelectedOption:
    """An option picked from one of the unit's groups."""

    group: UpgradeGroup
    option: UpgradeOption


@dataclass(frozen=True, slots=True)
class CostLine:
    group: str
    option: str
    cost: int


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    """Base cost plus one line per selected option."""

    unit: str
    base_cost: int
    lines: tuple[CostLine, ...]
    total: int


def check_selection(unit: Unit, selection: Selection) -> list[SelectedOption]:
    """Validate a selection against the unit's upgrade groups.

    Returns the picks in declaration order (group order, then option order)
    regardless of how the caller ordered the selection.  Raises
    :class:`IllegalSelection` for unknown groups or options and for picks
    that break a group's cardinality.
    """

    for label in selection:
        if unit.group(label) is None:
            raise IllegalSelection(
                f"unit {unit.name!r} has no upgrade group {label!r}", group=label
            )

    picks: list[SelectedOption] = []
    for group in unit.upgrade_groups:
        names = selection.get(group.group, ())
        if isinstance(names, str):
            raise TypeError(
                f"selection for group {group.group!r} must be a sequence of option names"
            )
        counts = _count_picks(unit, group, names)
        for option in group.options:
            picks.extend([SelectedOption(group, option)] * counts[option.name])
    return picks


def _count_picks(unit: Unit, group: UpgradeGroup, names: Iterable[str]) -> Counter[str]:
    counts = Counter(names)
    for name, count in counts.items():
        if group.option(name) is None:
            raise IllegalSelection(
                f"option {name!r} is not offered by group {group.group!r} of unit {unit.name!r}",
                group=group.group,
                option=name,
            )
        if count > 1 and not group.type.allows_repeats:
            raise IllegalSelection(
                f"option {name!r} selected {count} times in group {group.group!r}; "
                f"a {group.type.value!r} group allows each option once",
                group=group.group,
                option=name,
            )

    max_picks = group.type.max_picks
    total = sum(counts.values())
    if max_picks is not None and total > max_picks:
        raise IllegalSelection(
            f"group {group.group!r} of unit {unit.name!r} allows at most {max_picks} "
            f"option(s), got {total}",
            group=group.group,
        )
    return counts


def total_cost(unit: Unit, selection: Selection) -> int:
    """Return ``base_cost`` plus the cost of every selected option."""

    picks = check_selection(unit, selection)
    return unit.base_cost + sum(pick.option.cost for pick in picks)


def cost_breakdown(unit: Unit, selection: Selection) -> CostBreakdown:
    picks = check_selection(unit, selection)
    lines = tuple(CostLine(pick.group.group, pick.option.name, pick.option.cost) for pick in picks)
    return CostBreakdown(
        unit=unit.name,
        base_cost=unit.base_cost,
        lines=lines,
        total=unit.base_cost + sum(line.cost for line in lines),
    )


def document_cost(document: Document, entries: Iterable[tuple[str, Selection]]) -> int:
    """Total points of an army list given as ``(unit name, selection)`` entries."""

    return sum(total_cost(find_unit(document, name), selection) for name, selection in entries)
