"""
In-memory data store for the catalogue.

The catalog is filled by a single load pass: the index is fetched in
one request, then a localized name is looked up for every entry with
all lookups in flight at once.  The enriched list is published in one
swap when every lookup has settled, and stays read-only until the next
full reload.  ``CatalogStore`` also carries the load status that the
front‑end polls to draw its progress bar.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Callable, Dict, List, Optional

import httpx

from .pokeapi_service import CatalogLoadError, fetch_index, fetch_localized_name
from .schemas import AdjacentEntities, Entity, IndexEntry, LoadStatus, extract_identifier


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def percent(completed: int, total: int) -> int:
    """Completed share as a whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return int(math.floor(completed * 100 / total + 0.5))


class CatalogStore:
    """Holds the enriched catalog and the status of the load pass."""

    def __init__(self) -> None:
        self._entities: List[Entity] = []
        self._by_id: Dict[str, Entity] = {}
        self._status = LoadStatus()

    @property
    def entities(self) -> List[Entity]:
        return list(self._entities)

    @property
    def is_loading(self) -> bool:
        return self._status.loading

    def status(self) -> LoadStatus:
        s = self._status
        approximate = math.floor(s.progress / 100 * s.total) if s.progress > 0 else 0
        return s.model_copy(update={"approximate_count": approximate})

    def begin_load(self, expected_total: int = 0) -> None:
        self._status = LoadStatus(loading=True, progress=0, total=expected_total)

    def set_total(self, total: int) -> None:
        self._status = self._status.model_copy(update={"total": total})

    def report_progress(self, value: int) -> None:
        # Emissions can only move the bar forward within one pass.
        value = max(self._status.progress, min(100, value))
        self._status = self._status.model_copy(update={"progress": value})

    def publish(self, entities: List[Entity]) -> None:
        self._entities = list(entities)
        self._by_id = {e.identifier: e for e in self._entities}
        self._status = self._status.model_copy(update={"loading": False})

    def fail(self) -> None:
        # A failed pass publishes nothing; the previous catalog stays.
        self._status = self._status.model_copy(update={"loading": False})

    def get(self, identifier: str) -> Optional[Entity]:
        return self._by_id.get(identifier)

    def find_by_name(self, name: str) -> Optional[Entity]:
        return next((e for e in self._entities if e.name == name), None)


async def load_catalog(
    client: httpx.AsyncClient,
    *,
    language: str,
    limit: int,
    progress_step: int = 10,
    on_progress: Optional[ProgressCallback] = None,
    on_total: Optional[Callable[[int], None]] = None,
) -> List[Entity]:
    """Run one load pass and return the enriched entities in index order.

    ``CatalogLoadError`` from the index request propagates.  A failing
    species lookup only leaves that entity without a localized name.
    ``on_progress`` receives a percentage every ``progress_step``
    completions and once more on the last one.
    """
    entries = await fetch_index(client, limit)
    total = len(entries)
    if on_total is not None:
        on_total(total)
    if total == 0:
        return []

    completed = 0

    async def enrich(entry: IndexEntry) -> Entity:
        nonlocal completed
        try:
            localized = await fetch_localized_name(client, extract_identifier(entry.url), language)
        finally:
            completed += 1
            if on_progress is not None and (completed % progress_step == 0 or completed == total):
                on_progress(percent(completed, total))
        return Entity.from_index_entry(entry, localized)

    results = await asyncio.gather(*(enrich(entry) for entry in entries), return_exceptions=True)

    entities: List[Entity] = []
    for entry, result in zip(entries, results):
        if isinstance(result, Exception):
            logger.warning("Lookup for %s failed, keeping canonical name: %s", entry.name, result)
            result = Entity.from_index_entry(entry)
        elif isinstance(result, BaseException):
            raise result
        entities.append(result)
    return entities


async def refresh_catalog(
    store: CatalogStore,
    client: httpx.AsyncClient,
    *,
    language: str,
    limit: int,
    progress_step: int = 10,
) -> None:
    """Run a load pass against ``store``; the loading flag always ends cleared.

    The pass is begun here unless the caller already did so to report
    loading before the task runs.
    """
    if not store.is_loading:
        store.begin_load(limit)
    try:
        entities = await load_catalog(
            client,
            language=language,
            limit=limit,
            progress_step=progress_step,
            on_progress=store.report_progress,
            on_total=store.set_total,
        )
    except CatalogLoadError as exc:
        logger.error("Catalog load failed: %s", exc)
        store.fail()
        return
    except Exception:
        logger.exception("Unexpected error during catalog load")
        store.fail()
        return
    logger.info("Catalog loaded: %d entities", len(entities))
    store.publish(entities)


def adjacent(catalog: List[Entity], entity: Entity) -> AdjacentEntities:
    """Previous and next entities around ``entity`` in catalog order."""
    for i, item in enumerate(catalog):
        if item.identifier == entity.identifier:
            return AdjacentEntities(
                previous=catalog[i - 1] if i > 0 else None,
                next=catalog[i + 1] if i + 1 < len(catalog) else None,
            )
    return AdjacentEntities()
