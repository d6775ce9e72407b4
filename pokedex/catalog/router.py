"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /pokemon                     : list entities (search + favorites-only filter)
- GET  /pokemon/{identifier}        : get one entity
- GET  /pokemon/{identifier}/adjacent : previous/next entity in catalog order
- GET  /status                      : progress of the load pass
- POST /reload                      : start a new load pass
- GET  /favorites                   : list favorites
- POST /favorites/toggle            : add or remove a favorite
- GET  /view, POST /view/actions    : front‑end view state
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import shell
from ..models import (
    Action,
    BackAction,
    ClearSearchAction,
    NavigateAction,
    Screen,
    SearchAction,
    SelectAction,
    ToggleFavoritesOnlyAction,
    ViewActionRequest,
)
from ..state import AppState, get_app_state
from .schemas import AdjacentEntities, Entity, FavoritesResponse, LoadStatus, ToggleFavoriteRequest
from .search import derive
from .store import adjacent


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _get_or_404(state: AppState, identifier: str) -> Entity:
    entity = state.catalog.get(identifier)
    if entity is None:
        raise HTTPException(status_code=404, detail="Pokémon not found")
    return entity


def _resolve_name(state: AppState, name: str) -> Entity:
    """Find an entity by canonical name in the catalog, then in the favorites.

    Favorites are searched as well so that they stay reachable when the
    catalog failed to load.
    """
    entity = state.catalog.find_by_name(name)
    if entity is None:
        entity = next((f for f in state.favorites.favorites if f.name == name), None)
    if entity is None:
        raise HTTPException(status_code=404, detail="Pokémon not found")
    return entity


def _render(state: AppState) -> Screen:
    return shell.render(
        state.view,
        catalog=state.catalog.entities,
        favorites=state.favorites.favorites,
        status=state.catalog.status(),
    )


@router.get("/pokemon", response_model=List[Entity])
def list_pokemon(
    q: str = Query(default="", description="Recherche texte (nom français ou anglais)"),
    favorites_only: bool = Query(default=False, description="Limiter aux favoris"),
    state: AppState = Depends(get_app_state),
) -> List[Entity]:
    return derive(state.catalog.entities, state.favorites.favorites, favorites_only, q)


@router.get("/pokemon/{identifier}", response_model=Entity)
def get_pokemon(identifier: str, state: AppState = Depends(get_app_state)) -> Entity:
    return _get_or_404(state, identifier)


@router.get("/pokemon/{identifier}/adjacent", response_model=AdjacentEntities)
def get_adjacent(identifier: str, state: AppState = Depends(get_app_state)) -> AdjacentEntities:
    entity = _get_or_404(state, identifier)
    return adjacent(state.catalog.entities, entity)


@router.get("/status", response_model=LoadStatus)
def get_status(state: AppState = Depends(get_app_state)) -> LoadStatus:
    return state.catalog.status()


@router.post("/reload")
async def reload_catalog(state: AppState = Depends(get_app_state)):
    """Start a full load pass.  ``started`` is false if one is already running."""
    return {"started": state.start_load()}


# ---------------------------------------------------------------------------
# Favourite endpoints
#
# A favourite is keyed by the canonical name.  Toggling rewrites the
# whole persisted list.

@router.get("/favorites", response_model=List[Entity])
def list_favorites(state: AppState = Depends(get_app_state)) -> List[Entity]:
    return state.favorites.favorites


@router.post("/favorites/toggle", response_model=FavoritesResponse)
async def toggle_favorite(
    req: ToggleFavoriteRequest, state: AppState = Depends(get_app_state)
) -> FavoritesResponse:
    entity = _resolve_name(state, req.name)
    items = state.favorites.toggle(entity)
    return FavoritesResponse(
        name=entity.name,
        is_favorite=state.favorites.is_favorite(entity),
        items=items,
    )


# ---------------------------------------------------------------------------
# View endpoints
#
# The service keeps one view state, the equivalent of a single open
# browser tab.

@router.get("/view", response_model=Screen)
def get_view(state: AppState = Depends(get_app_state)) -> Screen:
    return _render(state)


def _to_action(state: AppState, req: ViewActionRequest) -> Action:
    if req.type == "search":
        return SearchAction(term=req.term)
    if req.type == "clear_search":
        return ClearSearchAction()
    if req.type == "toggle_favorites_only":
        return ToggleFavoritesOnlyAction()
    if req.type == "back":
        return BackAction()
    if not req.name:
        raise HTTPException(status_code=422, detail=f"Action {req.type!r} requires a name")
    entity = _resolve_name(state, req.name)
    if req.type == "select":
        return SelectAction(entity=entity)
    return NavigateAction(entity=entity)


@router.post("/view/actions", response_model=Screen)
async def apply_view_action(
    req: ViewActionRequest, state: AppState = Depends(get_app_state)
) -> Screen:
    if req.type == "toggle_favorite":
        if not req.name:
            raise HTTPException(status_code=422, detail="Action 'toggle_favorite' requires a name")
        state.favorites.toggle(_resolve_name(state, req.name))
    else:
        state.view = shell.reduce(state.view, _to_action(state, req))
    return _render(state)
