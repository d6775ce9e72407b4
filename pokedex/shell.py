# pokedex/shell.py
"""View-state transitions and screen rendering for the front‑end.

``reduce`` is the only way the view state changes: it takes the
current state and an action and returns the next state. ``render``
turns a state plus the catalog data into a ``Screen``. Neither touches
storage or the network.
"""
from typing import Sequence

from .catalog.schemas import Entity, LoadStatus
from .catalog.search import derive
from .catalog.store import adjacent
from .models import (
    Action,
    BackAction,
    ClearSearchAction,
    DetailView,
    ListItem,
    LoaderView,
    NavigateAction,
    Screen,
    SearchAction,
    SelectAction,
    ToggleFavoritesOnlyAction,
    ViewState,
)


TITLE_ALL = "Pokédex National"
TITLE_FAVORITES = "Mes Pokémons Favoris"
BUTTON_SHOW_FAVORITES = "❤️ Mes Favoris"
BUTTON_SHOW_ALL = "🏠 Voir Tout"
EMPTY_MESSAGE = "Aucun Pokémon trouvé. Essayez le balais 🧹 !"


def reduce(state: ViewState, action: Action) -> ViewState:
    if isinstance(action, SearchAction):
        return state.model_copy(update={"search_term": action.term})
    if isinstance(action, ClearSearchAction):
        return state.model_copy(update={"search_term": ""})
    if isinstance(action, ToggleFavoritesOnlyAction):
        return state.model_copy(update={"favorites_only": not state.favorites_only})
    if isinstance(action, (SelectAction, NavigateAction)):
        return state.model_copy(update={"selection": action.entity})
    if isinstance(action, BackAction):
        return state.model_copy(update={"selection": None})
    raise TypeError(f"Unknown action: {action!r}")


def _loader(status: LoadStatus) -> LoaderView:
    return LoaderView(
        progress=status.progress,
        text=f"Attrapez-les tous... {status.progress}%",
        count_text=f"Chargement de {status.approximate_count} / {status.total} Pokémons",
    )


def render(
    state: ViewState,
    *,
    catalog: Sequence[Entity],
    favorites: Sequence[Entity],
    status: LoadStatus,
) -> Screen:
    favorite_names = {f.name for f in favorites}
    screen = Screen(
        title=TITLE_FAVORITES if state.favorites_only else TITLE_ALL,
        mode="list",
        # The toggle button is only offered on the list view.
        show_favorites_button=state.selection is None,
        favorites_button_label=BUTTON_SHOW_ALL if state.favorites_only else BUTTON_SHOW_FAVORITES,
        search_term=state.search_term,
        favorites_only=state.favorites_only,
    )

    if state.selection is not None:
        selected = state.selection
        around = adjacent(list(catalog), selected)
        screen.mode = "detail"
        screen.detail = DetailView(
            entity=selected,
            display_name=selected.display_name,
            is_favorite=selected.name in favorite_names,
            previous=around.previous,
            next=around.next,
        )
        return screen

    if status.loading:
        screen.mode = "loading"
        screen.loader = _loader(status)
        return screen

    visible = derive(catalog, favorites, state.favorites_only, state.search_term)
    screen.items = [
        ListItem(
            identifier=e.identifier,
            name=e.name,
            display_name=e.display_name,
            is_favorite=e.name in favorite_names,
        )
        for e in visible
    ]
    if not visible:
        screen.empty_message = EMPTY_MESSAGE
    return screen
