# pokedex/main.py
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .catalog.router import router as catalog_router
from .settings import PokedexSettings
from .state import AppState
from .storage import KeyValueStorage


def create_app(
    settings: Optional[PokedexSettings] = None,
    *,
    storage: Optional[KeyValueStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    resolved_settings = settings or PokedexSettings()
    app_state = AppState(resolved_settings, storage=storage, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app_state.open()
        if resolved_settings.load_on_startup:
            app_state.start_load()
        try:
            yield
        finally:
            await app_state.close()

    app = FastAPI(
        title="Pokédex National",
        description=(
            "Catalogue des Pokémon chargé depuis PokéAPI, avec noms traduits, "
            "recherche et favoris."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.app_state = app_state

    # 🔹 Route de base pour tester rapidement
    @app.get("/")
    def health_check():
        status = app_state.catalog.status()
        return {"status": "ok", "loading": status.loading, "count": len(app_state.catalog.entities)}

    app.include_router(catalog_router)
    return app
