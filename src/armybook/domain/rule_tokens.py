"""Parsing of parameterised rule tokens such as ``Coriace (9)``.

Tokens stay opaque everywhere else; this module only splits off a trailing
integer parameter so totals like the unit's overall Tough value can be
computed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .costs import Selection, check_selection
from .models import Unit
from .profile import active_mount
from .rules_config import DEFAULT_RULES, RulesConfig

_PARAMETER = re.compile(r"^(?P<name>.+?)\s*\((?P<value>[+-]?\d+)\)\s*$")


@dataclass(frozen=True, slots=True)
class RuleToken:
    name: str
    value: int | None = None


def parse_rule(token: str) -> RuleToken:
    """Split ``"Coriace (9)"`` into ``RuleToken("Coriace", 9)``."""

    match = _PARAMETER.match(token)
    if match is None:
        return RuleToken(token.strip())
    return RuleToken(match["name"], int(match["value"]))


def rule_value(tokens: Iterable[str], name: str) -> int:
    """Sum the parameters of every token called ``name``."""

    total = 0
    for token in tokens:
        parsed = parse_rule(token)
        if parsed.name == name and parsed.value is not None:
            total += parsed.value
    return total


def total_tough(
    unit: Unit,
    selection: Selection | None = None,
    *,
    combined: bool = False,
    rules: RulesConfig = DEFAULT_RULES,
) -> int | None:
    """Total Tough value of a unit with its selected upgrades.

    Adds up the unit's own rules, the mount, every selected option and every
    weapon the unit ends up carrying.  A combined (doubled) unit that is not
    a hero counts its own Tough twice.  Returns ``None`` when the unit has no
    Tough at all.
    """

    name = rules.tokens.tough
    picks = check_selection(unit, selection or {})
    mount = active_mount(picks)

    total = rule_value(unit.special_rules, name)
    if mount is not None:
        total += rule_value(mount.special_rules, name)
    for pick in picks:
        total += rule_value(pick.option.special_rules, name)

    weapons = [*unit.weapons, *(weapon for pick in picks for weapon in pick.option.weapons)]
    if mount is not None:
        weapons.extend(mount.weapons)
    for weapon in weapons:
        total += rule_value(weapon.special_rules, name)

    if combined and unit.type.casefold() != rules.tokens.hero_type.casefold():
        total += rule_value(unit.special_rules, name)

    return total if total > 0 else None
