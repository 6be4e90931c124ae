"""Domain layer of the army book toolkit.

It exposes:

* Frozen dataclasses for the faction document entities (see :mod:`models`).
* The loader/validator and serializer (see :mod:`loader`).
* Pure functions for selection legality, costs, effective profiles and
  queries over a loaded document.

Everything here is synchronous and side-effect free once a document has
been loaded, so a single :class:`models.Document` may be shared freely.
"""

from . import (
    costs,
    enums,
    errors,
    loader,
    models,
    profile,
    query,
    rule_tokens,
    rules_config,
)

__all__ = [
    "costs",
    "enums",
    "errors",
    "loader",
    "models",
    "profile",
    "query",
    "rule_tokens",
    "rules_config",
]
