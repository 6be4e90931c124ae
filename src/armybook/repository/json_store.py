"""JSON-file repository for faction documents."""

from __future__ import annotations

import logging
from pathlib import Path

from armybook.domain import loader
from armybook.domain.errors import NotFound, ValidationError
from armybook.domain.models import Document

logger = logging.getLogger(__name__)


class JsonFactionRepository:
    """Read and write faction documents stored as ``<slug>.json`` files."""

    def __init__(self, base_path: Path, *, strict: bool = False) -> None:
        self.base_path = base_path
        self.strict = strict

    def _path_for(self, slug: str) -> Path:
        if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
            raise NotFound("faction", slug)
        return self.base_path / f"{slug}.json"

    def list_factions(self) -> list[str]:
        """Return the slugs of every faction file, sorted."""

        if not self.base_path.is_dir():
            return []
        return sorted(path.stem for path in self.base_path.glob("*.json"))

    def load(self, slug: str) -> Document:
        """Load and validate a faction document.

        Raises :class:`NotFound` for a missing file and
        :class:`~armybook.domain.errors.ValidationError` for an invalid one.
        """

        path = self._path_for(slug)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            logger.warning("faction file %s not found", path)
            raise NotFound("faction", slug) from exc
        try:
            document = loader.load(data, strict=self.strict)
        except ValidationError as exc:
            logger.warning(
                "faction file %s is invalid (%d violation(s))", path, len(exc.violations)
            )
            raise
        logger.info("loaded faction %s from %s", slug, path)
        return document

    def save(self, document: Document, slug: str) -> Path:
        """Serialize a document to disk and return the file path."""

        path = self._path_for(slug)
        self.base_path.mkdir(parents=True, exist_ok=True)
        path.write_text(loader.dumps(document) + "\n", encoding="utf-8")
        return path

    def delete(self, slug: str) -> None:
        """Remove a faction file if it exists."""

        path = self._path_for(slug)
        if path.exists():
            path.unlink()
