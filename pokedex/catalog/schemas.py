"""
Pydantic schema definitions for the catalog module.

The ``Entity`` model captures one Pokémon as it is shown in the list
and detail views: the canonical (English) name coming from the index,
the identifier taken from the resource URL and an optional localized
name resolved through the species endpoint. ``LoadStatus`` is what the
front‑end polls while the initial load pass is running.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def extract_identifier(url: str) -> str:
    """Return the last non-empty path segment of a resource URL.

    ``https://pokeapi.co/api/v2/pokemon/25/`` gives ``"25"``. A URL
    without any segment raises ``ValueError``.
    """
    segments = [s for s in (url or "").split("/") if s]
    if not segments:
        raise ValueError(f"No path segment in resource URL {url!r}")
    return segments[-1]


class IndexEntry(BaseModel):
    """Minimal reference returned by the bulk listing call."""

    name: str
    url: str


class Entity(BaseModel):
    """A single catalog item.

    Entities are created once per index entry during a load pass and
    never mutated afterwards, hence ``frozen``. The ``name`` field is
    the canonical name and doubles as the favorites key.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    name: str
    url: str = ""
    # Unset when the species lookup failed or had no entry for the
    # configured language; display falls back to ``name``.
    localized_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.localized_name or self.name

    @classmethod
    def from_index_entry(cls, entry: IndexEntry, localized_name: Optional[str] = None) -> "Entity":
        return cls(
            identifier=extract_identifier(entry.url),
            name=entry.name,
            url=entry.url,
            localized_name=localized_name,
        )


class LoadStatus(BaseModel):
    """Progress of the current (or last) load pass."""

    loading: bool = False
    progress: int = Field(default=0, ge=0, le=100)
    total: int = 0
    # Count shown under the progress bar, derived from the percentage.
    approximate_count: int = 0


class AdjacentEntities(BaseModel):
    """Neighbours of an entity in catalog order."""

    previous: Optional[Entity] = None
    next: Optional[Entity] = None


class ToggleFavoriteRequest(BaseModel):
    name: str


class FavoritesResponse(BaseModel):
    """Favorites set after a toggle, along with the toggled entity's new state."""

    name: str
    is_favorite: bool
    items: List[Entity]
