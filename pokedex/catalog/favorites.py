"""
Favourites management.

Favourites are a flat, ordered list of entity summaries kept under a
single key of a ``KeyValueStorage``.  The canonical ``name`` is the
membership key.  Every toggle rewrites the whole list; there is no
incremental update.  Reading never fails: a missing key, a value that
is not valid JSON or not a list all give an empty set.
"""

from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError

from ..storage import KeyValueStorage
from .schemas import Entity


logger = logging.getLogger(__name__)


class FavoritesStore:
    """Persisted favorites set, rehydrated once at construction."""

    def __init__(self, storage: KeyValueStorage, key: str = "pokedex_favorites") -> None:
        self._storage = storage
        self._key = key
        self._favorites: List[Entity] = self.load()

    @property
    def favorites(self) -> List[Entity]:
        return list(self._favorites)

    def names(self) -> List[str]:
        return [f.name for f in self._favorites]

    def load(self) -> List[Entity]:
        """Parse the favorites list from storage.

        Returns
        -------
        List[Entity]
            The stored favorites.  If the key is absent or the value is
            malformed, an empty list is returned.  Individual records
            that do not validate are skipped.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring unreadable favorites under %r: %s", self._key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring favorites under %r: expected a list", self._key)
            return []

        favorites: List[Entity] = []
        seen = set()
        for item in data:
            if not isinstance(item, dict):
                continue
            record = dict(item)
            # Older records may only carry the name.
            record.setdefault("identifier", record.get("name") or "")
            try:
                entity = Entity.model_validate(record)
            except ValidationError:
                logger.warning("Skipping malformed favorite record: %r", item)
                continue
            if entity.name in seen:
                continue
            seen.add(entity.name)
            favorites.append(entity)
        return favorites

    def persist(self, favorites: List[Entity]) -> bool:
        """Rewrite the stored list; ``False`` if the storage write failed."""
        payload = json.dumps([f.model_dump() for f in favorites], ensure_ascii=False)
        try:
            self._storage.set(self._key, payload)
        except OSError as exc:
            logger.warning("Could not persist favorites: %s", exc)
            return False
        return True

    def is_favorite(self, entity: Entity) -> bool:
        return any(f.name == entity.name for f in self._favorites)

    def toggle(self, entity: Entity) -> List[Entity]:
        """Remove ``entity`` if present, append it otherwise, then persist."""
        if self.is_favorite(entity):
            updated = [f for f in self._favorites if f.name != entity.name]
        else:
            updated = self._favorites + [entity]
        self._favorites = updated
        self.persist(updated)
        return list(updated)
