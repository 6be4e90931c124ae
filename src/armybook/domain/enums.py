"""Enumerations used by the army book domain."""

from __future__ import annotations

from enum import StrEnum


class SelectorType(StrEnum):
    """Cardinality of an upgrade group.

    No type forces a pick: an empty selection is legal for every group,
    ``one_or_more`` included, so an unmodified unit always costs its base
    cost.  ``one_or_more`` differs from ``multiple`` only in allowing the
    same option to be taken several times.
    """

    ONE = "one"
    MULTIPLE = "multiple"
    ONE_OR_MORE = "one_or_more"
    UPGRADE_ALL = "upgrade_all"

    @property
    def max_picks(self) -> int | None:
        """Maximum number of options that may be chosen, ``None`` if unbounded."""

        if self in (SelectorType.ONE, SelectorType.UPGRADE_ALL):
            return 1
        return None

    @property
    def allows_repeats(self) -> bool:
        """Whether the same option may be chosen more than once."""

        return self is SelectorType.ONE_OR_MORE
