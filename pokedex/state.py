"""Shared state container for the Pokédex service."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from fastapi import Request

from .catalog.favorites import FavoritesStore
from .catalog.pokeapi_service import create_client
from .catalog.store import CatalogStore, refresh_catalog
from .models import ViewState
from .settings import PokedexSettings
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


class AppState:
    """Catalog, favorites and view state shared by the routes.

    Everything here is mutated from the event loop only: the catalog is
    swapped once per load pass and the favorites list changes through
    ``FavoritesStore.toggle``.
    """

    def __init__(
        self,
        settings: PokedexSettings,
        *,
        storage: Optional[KeyValueStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        if storage is None:
            path = settings.storage_file
            storage = JsonFileStorage(path) if path is not None else MemoryStorage()
        self.catalog = CatalogStore()
        self.favorites = FavoritesStore(storage, settings.favorites_key)
        self.view = ViewState()
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None
        self.load_task: Optional[asyncio.Task] = None

    async def open(self) -> None:
        self.client = create_client(
            self.settings.api_base_url,
            user_agent=self.settings.user_agent,
            transport=self._transport,
        )

    async def close(self) -> None:
        # A pass still running at shutdown is dropped.
        if self.load_task is not None and not self.load_task.done():
            self.load_task.cancel()
            try:
                await self.load_task
            except asyncio.CancelledError:
                pass
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    def start_load(self) -> bool:
        """Schedule a full load pass unless one is already running."""
        if self.client is None:
            raise RuntimeError("HTTP client is not open")
        if self.load_task is not None and not self.load_task.done():
            return False
        self.catalog.begin_load(self.settings.index_limit)
        self.load_task = asyncio.create_task(
            refresh_catalog(
                self.catalog,
                self.client,
                language=self.settings.language,
                limit=self.settings.index_limit,
                progress_step=self.settings.progress_step,
            )
        )
        logger.info("Catalog load pass started")
        return True


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state
