"""Command line entry point for the army book tools.

Usage::

    armybook validate factions/*.json
    armybook --strict validate disciples_de_la_guerre.json
    armybook cost disciples_de_la_guerre.json "Maître de la Guerre Élu" \\
        --pick "Option=Manticore"
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from armybook.config import get_settings
from armybook.domain import costs, loader, profile, query, rule_tokens
from armybook.domain.errors import ArmyBookError, ValidationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``armybook`` CLI."""

    parser = argparse.ArgumentParser(
        prog="armybook",
        description="Validate faction army books and price unit selections",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject documents with unknown keys (default: ARMYBOOK_STRICT_DOCUMENTS)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    validate = commands.add_parser("validate", help="Validate one or more faction files")
    validate.add_argument("paths", nargs="+", type=Path, help="Faction JSON files")

    cost = commands.add_parser("cost", help="Price a unit with a set of upgrades")
    cost.add_argument("path", type=Path, help="Faction JSON file")
    cost.add_argument("unit", help="Unit name, exactly as written in the file")
    cost.add_argument(
        "--pick",
        action="append",
        default=[],
        metavar="GROUP=OPTION",
        help="Select OPTION from GROUP (repeatable)",
    )
    return parser


def parse_picks(picks: Sequence[str]) -> dict[str, list[str]]:
    """Turn ``GROUP=OPTION`` arguments into a selection mapping."""

    selection: dict[str, list[str]] = {}
    for pick in picks:
        group, sep, option = pick.partition("=")
        if not sep or not group or not option:
            raise argparse.ArgumentTypeError(f"expected GROUP=OPTION, got {pick!r}")
        selection.setdefault(group, []).append(option)
    return selection


def _validate(paths: Sequence[Path], strict: bool) -> int:
    failures = 0
    for path in paths:
        try:
            document = loader.load(path, strict=strict)
        except ValidationError as exc:
            failures += 1
            print(f"{path}: invalid")
            for violation in exc.violations:
                print(f"  {violation}")
            continue
        except OSError as exc:
            failures += 1
            print(f"{path}: {exc.strerror or exc}")
            continue
        print(f"{path}: ok ({document.faction}, {len(document.units)} unit(s))")
    return 1 if failures else 0


def _cost(path: Path, unit_name: str, picks: Sequence[str], strict: bool) -> int:
    document = loader.load(path, strict=strict)
    unit = query.find_unit(document, unit_name)
    selection = parse_picks(picks)

    breakdown = costs.cost_breakdown(unit, selection)
    resolved = profile.resolve(unit, selection)

    print(f"{unit.name} ({unit.type})  Q{resolved.quality}+ D{resolved.defense}+")
    print(f"  base                 {breakdown.base_cost:>5}")
    for line in breakdown.lines:
        print(f"  {line.group}: {line.option}  {line.cost:>+5}")
    print(f"  total                {breakdown.total:>5}")
    if resolved.mounted:
        print(f"  mounted on {resolved.mount_name}")
    print(f"  rules: {', '.join(resolved.special_rules) or '-'}")
    tough = rule_tokens.total_tough(unit, selection)
    if tough is not None:
        print(f"  total tough: {tough}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    strict = settings.strict_documents if args.strict is None else args.strict

    if args.command == "validate":
        return _validate(args.paths, strict)

    try:
        return _cost(args.path, args.unit, args.pick, strict)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (ArmyBookError, OSError) as exc:
        logger.debug("cost command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0  # pragma: no cover - parser.error exits


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
