"""Runtime primitives backing the army book HTTP API."""

from __future__ import annotations

import logging
from threading import Lock

from armybook.config import Settings, get_settings
from armybook.domain.models import Document
from armybook.repository import JsonFactionRepository

logger = logging.getLogger(__name__)


class FactionCatalog:
    """Caches loaded faction documents by slug.

    Documents are immutable once loaded, so cached values are handed out to
    concurrent requests as-is.
    """

    def __init__(self, repository: JsonFactionRepository) -> None:
        self._repository = repository
        self._documents: dict[str, Document] = {}
        self._lock = Lock()

    def slugs(self) -> list[str]:
        return self._repository.list_factions()

    def get(self, slug: str) -> Document:
        """Return the document for ``slug``, loading it on first use.

        Raises ``NotFound`` or ``ValidationError`` from the repository.
        """

        cached = self._documents.get(slug)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._documents.get(slug)
            if cached is None:
                cached = self._repository.load(slug)
                self._documents[slug] = cached
        return cached

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.repository = JsonFactionRepository(
            self.settings.data_dir, strict=self.settings.strict_documents
        )
        self.catalog = FactionCatalog(self.repository)

    def shutdown(self) -> None:
        self.catalog.clear()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    state = ApiState()
    logger.info("serving factions from %s", state.settings.data_dir)
    return state
