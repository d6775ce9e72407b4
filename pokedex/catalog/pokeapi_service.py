"""
PokéAPI integration for the catalogue.  This module talks to the
public, anonymous REST API at https://pokeapi.co and exposes two
primary coroutines:

* ``fetch_index()``: retrieve the full list of Pokémon in a single
  oversized page request.  Results are mapped into ``IndexEntry``.
  Any failure here is fatal for the load pass and raises
  ``CatalogLoadError``.

* ``fetch_localized_name()``: look up the species record of one
  Pokémon and return its name in the requested language.  This lookup
  is best-effort: some forms legitimately have no species record, so
  every failure is logged and ``None`` is returned.

Requests go through a shared ``httpx.AsyncClient`` so that the
per-entity lookups can all be in flight at once.  No timeout, retry
or cache is applied.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from .schemas import IndexEntry, extract_identifier


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class CatalogLoadError(Exception):
    """The entity index could not be retrieved."""


def create_client(
    base_url: str,
    *,
    user_agent: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Instantiate an async HTTPX client pointed at the API base URL."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=None,
        headers={"User-Agent": user_agent, "Accept": "application/json"},
        transport=transport,
    )


async def _get_json(client: httpx.AsyncClient, path: str) -> Optional[Any]:
    """Perform a GET and return parsed JSON or ``None`` on failure.

    A 404 is expected for entries without a species record and is only
    logged at debug level.  Other statuses and network errors are
    logged as warnings.
    """
    try:
        response = await client.get(path)
    except httpx.HTTPError as exc:
        logger.warning("Error fetching %s: %s", path, exc)
        return None
    if response.status_code == 404:
        logger.debug("No resource at %s", path)
        return None
    if not response.is_success:
        logger.warning("Request to %s returned status %s", path, response.status_code)
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Invalid JSON from %s: %s", path, exc)
        return None


async def fetch_index(client: httpx.AsyncClient, limit: int) -> List[IndexEntry]:
    """Return every index entry from ``/pokemon?limit=...``.

    Entries without a name or without a usable resource URL are
    skipped.  Transport errors, non-success statuses and bodies that do
    not carry a ``results`` list raise ``CatalogLoadError``.
    """
    try:
        response = await client.get("pokemon", params={"limit": limit})
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise CatalogLoadError(f"Index request failed: {exc}") from exc

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise CatalogLoadError("Index response has no 'results' list")

    entries: List[IndexEntry] = []
    for raw in results:
        if not isinstance(raw, dict):
            continue
        name = raw.get("name")
        url = raw.get("url")
        if not isinstance(name, str) or not name or not isinstance(url, str):
            logger.warning("Skipping malformed index entry: %r", raw)
            continue
        try:
            extract_identifier(url)
        except ValueError:
            logger.warning("Skipping index entry %s: no identifier in %r", name, url)
            continue
        entries.append(IndexEntry(name=name, url=url))
    return entries


def pick_localized_name(payload: Any, language: str) -> Optional[str]:
    """Select the ``names`` entry whose ``language.name`` equals ``language``."""
    if not isinstance(payload, dict):
        return None
    for entry in payload.get("names") or []:
        if not isinstance(entry, dict):
            continue
        lang = entry.get("language")
        if isinstance(lang, dict) and lang.get("name") == language:
            name = entry.get("name")
            if isinstance(name, str) and name:
                return name
    return None


async def fetch_localized_name(
    client: httpx.AsyncClient, identifier: str, language: str
) -> Optional[str]:
    """Return the species name of ``identifier`` in ``language``, if any."""
    payload = await _get_json(client, f"pokemon-species/{identifier}/")
    if payload is None:
        return None
    return pick_localized_name(payload, language)
