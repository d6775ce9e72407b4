"""
Search helpers for the catalogue list view.

``derive()`` computes the list the front‑end displays from the loaded
catalog, the favorites set and the two user controls (favorites-only
toggle and search box).  It is a pure function and keeps the order of
its source list; nothing is ranked or sorted here.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .schemas import Entity


def _norm(s: Optional[str]) -> str:
    """Lowercase a string for case-insensitive matching; ``None`` gives ``""``."""
    return (s or "").lower()


def matches(entity: Entity, term: str) -> bool:
    """True when ``term`` is a substring of the localized or canonical name.

    Matching ignores case.  An empty term matches every entity.
    """
    nterm = _norm(term)
    if not nterm:
        return True
    if entity.localized_name and nterm in _norm(entity.localized_name):
        return True
    return nterm in _norm(entity.name)


def derive(
    catalog: Sequence[Entity],
    favorites: Sequence[Entity],
    favorites_only: bool,
    search_term: str,
) -> List[Entity]:
    """Return the entities to display, in source order.

    Parameters
    ----------
    catalog : Sequence[Entity]
        The loaded catalog (possibly empty after a failed load).
    favorites : Sequence[Entity]
        The persisted favorites set.
    favorites_only : bool
        When set, the favorites set is the source list instead of the
        catalog.
    search_term : str
        Free text typed in the search box.

    Returns
    -------
    List[Entity]
        The filtered list.  An empty list is a valid result.
    """
    source = favorites if favorites_only else catalog
    return [e for e in source if matches(e, search_term)]
