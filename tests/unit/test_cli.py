"""Tests for the command line entry point."""

from __future__ import annotations

import argparse
import json

import pytest
from factories import document, unit

from armybook.cli import main, parse_picks

HERO = "Maître de la Guerre Élu"


def test_parse_picks():
    assert parse_picks(["Option=A", "Option=B", "Monture=Loup"]) == {
        "Option": ["A", "B"],
        "Monture": ["Loup"],
    }
    assert parse_picks(["Option=Conquérant (Aura=x)"]) == {"Option": ["Conquérant (Aura=x)"]}
    with pytest.raises(argparse.ArgumentTypeError):
        parse_picks(["Option"])


def test_validate_ok(sample_path, capsys):
    assert main(["validate", str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert "ok (Disciples de la Guerre, 1 unit(s))" in out


def test_validate_reports_violations(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(document(unit(base_cost=-1))), encoding="utf-8")

    assert main(["validate", str(bad)]) == 1
    out = capsys.readouterr().out
    assert "invalid" in out
    assert "units[0].base_cost: [out_of_range]" in out


def test_validate_missing_file(tmp_path, capsys):
    assert main(["validate", str(tmp_path / "none.json")]) == 1


def test_strict_flag(tmp_path, capsys):
    path = tmp_path / "extra.json"
    path.write_text(json.dumps(document(unit(), revision=1)), encoding="utf-8")

    assert main(["validate", str(path)]) == 0
    assert main(["--strict", "validate", str(path)]) == 1
    assert "[unknown_key]" in capsys.readouterr().out


def test_cost_command(sample_path, capsys):
    code = main(
        [
            "cost",
            str(sample_path),
            HERO,
            "--pick",
            "Option=Manticore",
            "--pick",
            "Option=Marauder (Aura de combat imprévisible)",
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "265" in out
    assert "mounted on Manticore" in out
    assert "total tough: 12" in out


def test_cost_command_illegal_selection(sample_path, capsys):
    code = main(
        ["cost", str(sample_path), HERO, "--pick", "Option=Manticore", "--pick", "Option=Manticore"]
    )
    assert code == 1
    assert "Manticore" in capsys.readouterr().err


def test_cost_command_unknown_unit(sample_path, capsys):
    assert main(["cost", str(sample_path), "Personne"]) == 1
    assert "not found" in capsys.readouterr().err
