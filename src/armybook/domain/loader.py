"""Load, validate and serialize faction documents.

Structural checks go through the pydantic models in
:mod:`armybook.schemas.document`; name uniqueness is checked on the raw
tree.  Both passes always run so a single :func:`load` call reports as
many violations as possible.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from armybook.schemas import document as schema

from .enums import SelectorType
from .errors import SchemaViolation, ValidationError
from .models import Document, Mount, Unit, UpgradeGroup, UpgradeOption, Weapon

logger = logging.getLogger(__name__)

Source = bytes | bytearray | str | Path | IO[bytes] | Mapping[str, Any] | list[Any]

ROOT = "$"

# values json.loads can return, passed to validation as an already-parsed tree
_PARSED = (Mapping, list, int, float, type(None))

# nested objects per schema model, used to find unknown keys on the raw tree
_CHILDREN: dict[type[BaseModel], dict[str, type[BaseModel]]] = {
    schema.DocumentSchema: {"units": schema.UnitSchema},
    schema.UnitSchema: {
        "weapons": schema.WeaponSchema,
        "upgrade_groups": schema.UpgradeGroupSchema,
    },
    schema.UpgradeGroupSchema: {"options": schema.UpgradeOptionSchema},
    schema.UpgradeOptionSchema: {"weapons": schema.WeaponSchema, "mount": schema.MountSchema},
    schema.MountSchema: {"weapons": schema.WeaponSchema},
    schema.WeaponSchema: {},
}

# pydantic error types folded into the toolkit's rule vocabulary
_RULE_NAMES = {
    "missing": "required",
    "greater_than_equal": "out_of_range",
    "less_than_equal": "out_of_range",
    "too_short": "non_empty",
    "string_too_short": "non_empty",
    "int_type": "type",
    "string_type": "type",
    "list_type": "type",
    "model_type": "type",
    "model_attributes_type": "type",
}


def format_path(loc: Sequence[str | int]) -> str:
    """Render a location tuple as ``units[0].weapons[1].range``."""

    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or ROOT


def load(source: Source, *, strict: bool = False) -> Document:
    """Parse and validate a faction document.

    ``source`` may be JSON bytes or text, a path, a binary file object or an
    already-parsed tree (whatever ``json.loads`` returns).  With ``strict``
    set, keys the schema does not know are reported as violations instead
    of being carried along.
    """

    tree = _read_tree(source)
    violations: list[SchemaViolation] = []

    parsed: schema.DocumentSchema | None = None
    try:
        parsed = schema.DocumentSchema.model_validate(tree)
    except PydanticValidationError as exc:
        violations.extend(_from_pydantic(exc))

    violations.extend(_name_violations(tree))

    unknown = list(_unknown_keys(tree, schema.DocumentSchema, ()))
    if strict:
        violations.extend(
            SchemaViolation(format_path((*loc, key)), "unknown_key", f"unknown key {key!r}")
            for loc, key in unknown
        )
    elif unknown:
        logger.debug("ignoring %d unknown key(s) in faction document", len(unknown))

    if violations or parsed is None:
        raise ValidationError(violations)

    document = _build_document(parsed)
    logger.debug("loaded faction %r with %d unit(s)", document.faction, len(document.units))
    return document


def _read_tree(source: Source) -> Any:
    if isinstance(source, _PARSED):
        return source
    if isinstance(source, Path):
        data: bytes | bytearray | str = source.read_bytes()
    elif isinstance(source, (bytes, bytearray, str)):
        data = source
    elif hasattr(source, "read"):
        data = source.read()
    else:
        raise TypeError(f"cannot load a faction document from {type(source).__name__}")

    try:
        return json.loads(data)
    except ValueError as exc:
        raise ValidationError([SchemaViolation(ROOT, "json_invalid", str(exc))]) from exc


def _from_pydantic(exc: PydanticValidationError) -> Iterator[SchemaViolation]:
    for error in exc.errors(include_url=False):
        rule = _RULE_NAMES.get(error["type"], error["type"])
        yield SchemaViolation(format_path(error["loc"]), rule, error["msg"])


def _name_violations(tree: Any) -> Iterator[SchemaViolation]:
    if not isinstance(tree, Mapping):
        return
    units = tree.get("units")
    if not isinstance(units, list):
        return

    yield from _duplicates(units, "units", "name", "unit")
    for unit_index, unit in enumerate(units):
        if not isinstance(unit, Mapping):
            continue
        groups = unit.get("upgrade_groups")
        if not isinstance(groups, list):
            continue
        groups_path = f"units[{unit_index}].upgrade_groups"
        yield from _duplicates(groups, groups_path, "group", "upgrade group")
        for group_index, group in enumerate(groups):
            if not isinstance(group, Mapping):
                continue
            options = group.get("options")
            if isinstance(options, list):
                options_path = f"{groups_path}[{group_index}].options"
                yield from _duplicates(options, options_path, "name", "option")


def _duplicates(items: list[Any], path: str, key: str, kind: str) -> Iterator[SchemaViolation]:
    seen: dict[str, int] = {}
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            continue
        name = item.get(key)
        if not isinstance(name, str):
            continue
        if name in seen:
            yield SchemaViolation(
                f"{path}[{index}].{key}",
                "unique_name",
                f"duplicate {kind} name {name!r}, first used at {path}[{seen[name]}]",
            )
        else:
            seen[name] = index


def _unknown_keys(
    tree: Any, model: type[BaseModel], loc: tuple[str | int, ...]
) -> Iterator[tuple[tuple[str | int, ...], str]]:
    if not isinstance(tree, Mapping):
        return
    for key in tree:
        if key not in model.model_fields:
            yield loc, key
    for name, child in _CHILDREN[model].items():
        value = tree.get(name)
        if isinstance(value, list):
            for index, item in enumerate(value):
                yield from _unknown_keys(item, child, (*loc, name, index))
        else:
            yield from _unknown_keys(value, child, (*loc, name))


# --- schema -> entity ---------------------------------------------------------


def _extra(model: BaseModel) -> Mapping[str, Any]:
    return MappingProxyType(dict(model.model_extra or {}))


def _build_weapon(data: schema.WeaponSchema) -> Weapon:
    return Weapon(
        name=data.name,
        range=None if data.range == schema.MELEE else data.range,
        attacks=data.attacks,
        armor_piercing=data.armor_piercing,
        special_rules=tuple(data.special_rules),
        extra=_extra(data),
    )


def _build_mount(data: schema.MountSchema) -> Mount:
    return Mount(
        name=data.name,
        special_rules=tuple(data.special_rules),
        quality=data.quality,
        defense=data.defense,
        weapons=tuple(_build_weapon(weapon) for weapon in data.weapons),
        extra=_extra(data),
    )


def _build_option(data: schema.UpgradeOptionSchema) -> UpgradeOption:
    return UpgradeOption(
        name=data.name,
        cost=data.cost,
        special_rules=tuple(data.special_rules),
        weapons=tuple(_build_weapon(weapon) for weapon in data.weapons),
        mount=_build_mount(data.mount) if data.mount is not None else None,
        extra=_extra(data),
    )


def _build_group(data: schema.UpgradeGroupSchema) -> UpgradeGroup:
    return UpgradeGroup(
        group=data.group,
        type=SelectorType(data.type),
        options=tuple(_build_option(option) for option in data.options),
        extra=_extra(data),
    )


def _build_unit(data: schema.UnitSchema) -> Unit:
    return Unit(
        name=data.name,
        type=data.type,
        base_cost=data.base_cost,
        quality=data.quality,
        defense=data.defense,
        special_rules=tuple(data.special_rules),
        weapons=tuple(_build_weapon(weapon) for weapon in data.weapons),
        upgrade_groups=tuple(_build_group(group) for group in data.upgrade_groups),
        extra=_extra(data),
    )


def _build_document(data: schema.DocumentSchema) -> Document:
    return Document(
        faction=data.faction,
        game=data.game,
        units=tuple(_build_unit(unit) for unit in data.units),
        extra=_extra(data),
    )


# --- entity -> document -------------------------------------------------------


def _dump_weapon(weapon: Weapon) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": weapon.name,
        "range": schema.MELEE if weapon.range is None else weapon.range,
        "attacks": weapon.attacks,
    }
    if weapon.armor_piercing:
        payload["armor_piercing"] = weapon.armor_piercing
    if weapon.special_rules:
        payload["special_rules"] = list(weapon.special_rules)
    payload.update(weapon.extra)
    return payload


def _dump_mount(mount: Mount) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": mount.name, "special_rules": list(mount.special_rules)}
    if mount.quality is not None:
        payload["quality"] = mount.quality
    if mount.defense is not None:
        payload["defense"] = mount.defense
    if mount.weapons:
        payload["weapons"] = [_dump_weapon(weapon) for weapon in mount.weapons]
    payload.update(mount.extra)
    return payload


def _dump_option(option: UpgradeOption) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": option.name, "cost": option.cost}
    if option.special_rules:
        payload["special_rules"] = list(option.special_rules)
    if option.weapons:
        payload["weapons"] = [_dump_weapon(weapon) for weapon in option.weapons]
    if option.mount is not None:
        payload["mount"] = _dump_mount(option.mount)
    payload.update(option.extra)
    return payload


def dump_unit(unit: Unit) -> dict[str, Any]:
    """Serialize one unit to its document shape."""

    payload: dict[str, Any] = {
        "name": unit.name,
        "type": unit.type,
        "base_cost": unit.base_cost,
        "quality": unit.quality,
        "defense": unit.defense,
        "special_rules": list(unit.special_rules),
        "weapons": [_dump_weapon(weapon) for weapon in unit.weapons],
    }
    if unit.upgrade_groups:
        payload["upgrade_groups"] = [
            {
                "group": group.group,
                "type": group.type.value,
                "options": [_dump_option(option) for option in group.options],
                **group.extra,
            }
            for group in unit.upgrade_groups
        ]
    payload.update(unit.extra)
    return payload


def dump(document: Document) -> dict[str, Any]:
    """Serialize a document back to a JSON-compatible tree."""

    payload: dict[str, Any] = {
        "faction": document.faction,
        "game": document.game,
        "units": [dump_unit(unit) for unit in document.units],
    }
    payload.update(document.extra)
    return payload


def dumps(document: Document, *, indent: int | None = 2) -> str:
    """Serialize a document to JSON text, keeping non-ASCII characters."""

    return json.dumps(dump(document), ensure_ascii=False, indent=indent)
