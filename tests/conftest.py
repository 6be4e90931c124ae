"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`armybook` package without requiring an editable install in CI, and
provides the bundled sample faction as fixtures.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

SAMPLE_PATH = SRC_PATH / "armybook" / "data" / "disciples_de_la_guerre.json"
HERO = "Maître de la Guerre Élu"


@pytest.fixture
def sample_path() -> Path:
    return SAMPLE_PATH


@pytest.fixture
def sample_document():
    from armybook.domain.loader import load

    return load(SAMPLE_PATH)


@pytest.fixture
def hero(sample_document):
    from armybook.domain.query import find_unit

    return find_unit(sample_document, HERO)
