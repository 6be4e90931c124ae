"""Pydantic models describing the on-disk shape of a faction document.

These models only check structure and value ranges.  Cross-entry checks
(unique unit, group and option names) are done by the loader on the raw
tree so that they are reported together with the structural errors.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic_core import PydanticCustomError

from armybook.domain.enums import SelectorType
from armybook.domain.rules_config import DEFAULT_RULES

MELEE = DEFAULT_RULES.weapons.melee_range


def _unique_tokens(tokens: list[str]) -> list[str]:
    seen: set[str] = set()
    for token in tokens:
        if token in seen:
            raise PydanticCustomError(
                "duplicate_rule",
                "rule '{token}' is listed more than once",
                {"token": token},
            )
        seen.add(token)
    return tokens


NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
RuleSet = Annotated[list[NonEmptyStr], AfterValidator(_unique_tokens)]
Stat = Annotated[
    StrictInt, Field(ge=DEFAULT_RULES.stats.minimum, le=DEFAULT_RULES.stats.maximum)
]


def parse_range(value: Any) -> int | str:
    """Normalise a weapon range to the melee sentinel or a positive int."""

    if isinstance(value, str):
        if value == MELEE:
            return MELEE
        if value.isascii() and value.isdigit() and int(value) > 0:
            return int(value)
    elif isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    raise PydanticCustomError(
        "range",
        "range must be '{melee}' or a positive integer, got {value}",
        {"melee": MELEE, "value": repr(value)},
    )


class _DocumentModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class WeaponSchema(_DocumentModel):
    name: NonEmptyStr
    range: Any
    attacks: Annotated[StrictInt, Field(ge=DEFAULT_RULES.weapons.min_attacks)]
    armor_piercing: Annotated[StrictInt, Field(ge=0)] = 0
    special_rules: RuleSet = Field(default_factory=list)

    @field_validator("range")
    @classmethod
    def _check_range(cls, value: Any) -> int | str:
        return parse_range(value)


class MountSchema(_DocumentModel):
    name: NonEmptyStr
    special_rules: RuleSet = Field(default_factory=list)
    quality: Stat | None = None
    defense: Stat | None = None
    weapons: list[WeaponSchema] = Field(default_factory=list)


class UpgradeOptionSchema(_DocumentModel):
    name: NonEmptyStr
    cost: StrictInt
    special_rules: RuleSet = Field(default_factory=list)
    weapons: list[WeaponSchema] = Field(default_factory=list)
    mount: MountSchema | None = None


class UpgradeGroupSchema(_DocumentModel):
    group: NonEmptyStr
    type: StrictStr
    options: Annotated[list[UpgradeOptionSchema], Field(min_length=1)]

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        if value not in {member.value for member in SelectorType}:
            raise PydanticCustomError(
                "selector_type",
                "unknown group type '{value}', expected one of {allowed}",
                {"value": value, "allowed": ", ".join(SelectorType)},
            )
        return value


class UnitSchema(_DocumentModel):
    name: NonEmptyStr
    type: NonEmptyStr
    base_cost: Annotated[StrictInt, Field(ge=0)]
    quality: Stat
    defense: Stat
    special_rules: RuleSet = Field(default_factory=list)
    weapons: Annotated[list[WeaponSchema], Field(min_length=1)]
    upgrade_groups: list[UpgradeGroupSchema] = Field(default_factory=list)


class DocumentSchema(_DocumentModel):
    faction: NonEmptyStr
    game: NonEmptyStr
    units: list[UnitSchema]
