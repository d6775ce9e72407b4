# pokedex/models.py
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from .catalog.schemas import Entity


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    favorites_only: bool = False
    selection: Optional[Entity] = None


# Shell actions. Each one is handled by ``shell.reduce``.

class SearchAction(BaseModel):
    type: Literal["search"] = "search"
    term: str


class ClearSearchAction(BaseModel):
    type: Literal["clear_search"] = "clear_search"


class ToggleFavoritesOnlyAction(BaseModel):
    type: Literal["toggle_favorites_only"] = "toggle_favorites_only"


class SelectAction(BaseModel):
    type: Literal["select"] = "select"
    entity: Entity


class BackAction(BaseModel):
    type: Literal["back"] = "back"


class NavigateAction(BaseModel):
    type: Literal["navigate"] = "navigate"
    entity: Entity


Action = Annotated[
    Union[
        SearchAction,
        ClearSearchAction,
        ToggleFavoritesOnlyAction,
        SelectAction,
        BackAction,
        NavigateAction,
    ],
    Field(discriminator="type"),
]


class ViewActionRequest(BaseModel):
    """Action as posted by the front‑end.

    Entities are referenced by their canonical ``name``; the router
    resolves them before reducing. ``toggle_favorite`` is not a view
    transition: it goes to the favorites store.
    """

    type: Literal[
        "search",
        "clear_search",
        "toggle_favorites_only",
        "select",
        "back",
        "navigate",
        "toggle_favorite",
    ]
    term: str = ""
    name: Optional[str] = None


class ListItem(BaseModel):
    identifier: str
    name: str
    display_name: str
    is_favorite: bool = False


class LoaderView(BaseModel):
    progress: int
    text: str
    count_text: str


class DetailView(BaseModel):
    entity: Entity
    display_name: str
    is_favorite: bool
    previous: Optional[Entity] = None
    next: Optional[Entity] = None


class Screen(BaseModel):
    """Everything needed to draw the current screen."""

    title: str
    mode: Literal["loading", "list", "detail"]
    show_favorites_button: bool
    favorites_button_label: str
    search_term: str = ""
    favorites_only: bool = False
    items: List[ListItem] = Field(default_factory=list)
    # Set only when the list view has nothing to show.
    empty_message: Optional[str] = None
    loader: Optional[LoaderView] = None
    detail: Optional[DetailView] = None
