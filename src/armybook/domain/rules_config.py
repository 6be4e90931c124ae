"""Declarative constants for document validation and rule lookups."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StatRules:
    """Bounds for the quality and defense target numbers."""

    minimum: int = 2
    maximum: int = 6


@dataclass(frozen=True, slots=True)
class WeaponRules:
    """Weapon profile constants."""

    melee_range: str = "-"
    min_attacks: int = 1


@dataclass(frozen=True, slots=True)
class TokenRules:
    """Names of the rule tokens the toolkit reads parameters from."""

    tough: str = "Coriace"
    hero_type: str = "Hero"


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container."""

    stats: StatRules = StatRules()
    weapons: WeaponRules = WeaponRules()
    tokens: TokenRules = TokenRules()


DEFAULT_RULES = RulesConfig()
