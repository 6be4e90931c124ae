"""Exception hierarchy for the army book toolkit.

Exception tree:
    ArmyBookError
    +-- ValidationError      (document failed one or more schema checks)
    +-- SelectionError
    |   +-- IllegalSelection (unknown group/option or cardinality breach)
    |   +-- ConflictingMounts (more than one mount chosen)
    +-- NotFound             (lookup by name failed)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SchemaViolation:
    """A single problem found while validating a document."""

    path: str
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: [{self.rule}] {self.message}"


class ArmyBookError(Exception):
    """Base exception for all army book errors."""


class ValidationError(ArmyBookError):
    """Raised by the loader with every violation found in one pass."""

    def __init__(self, violations: Iterable[SchemaViolation]) -> None:
        self.violations: list[SchemaViolation] = list(violations)
        lines = "\n".join(f"  {violation}" for violation in self.violations)
        super().__init__(f"{len(self.violations)} schema violation(s):\n{lines}")

    def paths(self) -> list[str]:
        return [violation.path for violation in self.violations]

    def rules(self) -> list[str]:
        return [violation.rule for violation in self.violations]


class SelectionError(ArmyBookError):
    """Base class for errors raised while applying a selection to a unit."""


class IllegalSelection(SelectionError):
    """A selection breaks a group's cardinality or names an unknown option."""

    def __init__(self, message: str, *, group: str, option: str | None = None) -> None:
        self.group = group
        self.option = option
        super().__init__(message)


class ConflictingMounts(SelectionError):
    """More than one mount-bearing option was selected."""

    def __init__(self, options: Sequence[str]) -> None:
        self.options = tuple(options)
        names = ", ".join(repr(name) for name in self.options)
        super().__init__(f"only one mount may be selected, got {names}")


class NotFound(ArmyBookError, LookupError):
    """A unit, faction or option lookup by name failed."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} {name!r} not found")
