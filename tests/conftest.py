"""Shared fixtures: a fake PokéAPI served through ``httpx.MockTransport``."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import httpx
import pytest

API_BASE = "https://pokeapi.test/api/v2"


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


def index_entry(name: str, identifier: str) -> Dict[str, str]:
    return {"name": name, "url": f"{API_BASE}/pokemon/{identifier}/"}


def make_transport(
    index: List[Dict[str, str]],
    french_names: Optional[Dict[str, str]] = None,
    *,
    failing_ids: Iterable[str] = (),
    index_status: int = 200,
    index_body: Optional[object] = None,
) -> httpx.MockTransport:
    """Build a transport answering the index and species endpoints.

    Species lookups for ``failing_ids`` raise a connection error; ids
    missing from ``french_names`` answer 404.
    """
    french_names = french_names or {}
    failing = set(failing_ids)

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/pokemon"):
            if index_status != 200:
                return httpx.Response(index_status, json={"detail": "error"})
            body = index_body if index_body is not None else {"count": len(index), "results": index}
            return httpx.Response(200, json=body)
        if "/pokemon-species/" in path:
            identifier = path.rstrip("/").split("/")[-1]
            if identifier in failing:
                raise httpx.ConnectError("connection refused", request=request)
            if identifier not in french_names:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(
                200,
                json={
                    "names": [
                        {"name": french_names[identifier].upper(), "language": {"name": "de"}},
                        {"name": french_names[identifier], "language": {"name": "fr"}},
                    ]
                },
            )
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture()
def starter_index() -> List[Dict[str, str]]:
    return [index_entry("bulbasaur", "1"), index_entry("ivysaur", "2")]
