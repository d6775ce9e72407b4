"""Tests for the HTTP surface of the Pokédex service."""
from __future__ import annotations

import json
import time
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from pokedex.catalog.schemas import Entity
from pokedex.main import create_app
from pokedex.settings import PokedexSettings
from pokedex.storage import MemoryStorage
from tests.conftest import API_BASE, index_entry, make_transport

KEY = "pokedex_favorites"

CATALOG = [
    Entity(identifier="1", name="bulbasaur", localized_name="Bulbizarre"),
    Entity(identifier="2", name="ivysaur"),
    Entity(identifier="3", name="venusaur", localized_name="Florizarre"),
]


def _settings(**overrides) -> PokedexSettings:
    values = {"api_base_url": API_BASE, "storage_path": "", "load_on_startup": False}
    values.update(overrides)
    return PokedexSettings(**values)


def _wait_until_loaded(client: TestClient) -> dict:
    for _ in range(500):
        status = client.get("/api/catalog/status").json()
        if not status["loading"]:
            return status
        time.sleep(0.01)
    raise AssertionError("catalog load did not finish")


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def client(storage: MemoryStorage) -> Iterator[TestClient]:
    """A client over an app whose catalog is seeded without network access."""
    app = create_app(_settings(), storage=storage, transport=make_transport([]))
    app.state.app_state.catalog.publish(CATALOG)
    with TestClient(app) as test_client:
        yield test_client


def test_health_check(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "loading": False, "count": 3}


def test_list_pokemon_filters_by_search_term(client: TestClient) -> None:
    everything = client.get("/api/catalog/pokemon").json()
    assert [p["name"] for p in everything] == ["bulbasaur", "ivysaur", "venusaur"]

    found = client.get("/api/catalog/pokemon", params={"q": "FLORI"}).json()
    assert [p["identifier"] for p in found] == ["3"]


def test_get_pokemon_and_adjacent(client: TestClient) -> None:
    response = client.get("/api/catalog/pokemon/2")
    assert response.status_code == 200
    assert response.json()["name"] == "ivysaur"

    around = client.get("/api/catalog/pokemon/2/adjacent").json()
    assert around["previous"]["name"] == "bulbasaur"
    assert around["next"]["name"] == "venusaur"


def test_unknown_pokemon_is_404(client: TestClient) -> None:
    assert client.get("/api/catalog/pokemon/999").status_code == 404
    assert client.get("/api/catalog/pokemon/999/adjacent").status_code == 404


def test_toggle_favorite_round_trip(client: TestClient, storage: MemoryStorage) -> None:
    added = client.post("/api/catalog/favorites/toggle", json={"name": "ivysaur"})
    assert added.status_code == 200
    assert added.json()["is_favorite"] is True
    assert [f["name"] for f in json.loads(storage.get(KEY))] == ["ivysaur"]

    favorites_only = client.get("/api/catalog/pokemon", params={"favorites_only": True}).json()
    assert [p["name"] for p in favorites_only] == ["ivysaur"]

    removed = client.post("/api/catalog/favorites/toggle", json={"name": "ivysaur"})
    assert removed.json() == {"name": "ivysaur", "is_favorite": False, "items": []}
    assert json.loads(storage.get(KEY)) == []
    assert client.get("/api/catalog/favorites").json() == []


def test_toggle_unknown_name_is_404(client: TestClient) -> None:
    response = client.post("/api/catalog/favorites/toggle", json={"name": "missingno"})
    assert response.status_code == 404


def test_view_actions_drive_the_screen(client: TestClient) -> None:
    screen = client.get("/api/catalog/view").json()
    assert screen["mode"] == "list"
    assert len(screen["items"]) == 3

    screen = client.post("/api/catalog/view/actions", json={"type": "search", "term": "ivy"}).json()
    assert [i["name"] for i in screen["items"]] == ["ivysaur"]

    screen = client.post("/api/catalog/view/actions", json={"type": "select", "name": "ivysaur"}).json()
    assert screen["mode"] == "detail"
    assert screen["show_favorites_button"] is False
    assert screen["detail"]["is_favorite"] is False

    screen = client.post(
        "/api/catalog/view/actions", json={"type": "toggle_favorite", "name": "ivysaur"}
    ).json()
    assert screen["detail"]["is_favorite"] is True

    screen = client.post("/api/catalog/view/actions", json={"type": "navigate", "name": "venusaur"}).json()
    assert screen["detail"]["display_name"] == "Florizarre"
    assert screen["detail"]["previous"]["name"] == "ivysaur"

    screen = client.post("/api/catalog/view/actions", json={"type": "back"}).json()
    assert screen["mode"] == "list"
    assert screen["search_term"] == "ivy"

    screen = client.post("/api/catalog/view/actions", json={"type": "clear_search"}).json()
    screen = client.post("/api/catalog/view/actions", json={"type": "toggle_favorites_only"}).json()
    assert screen["title"] == "Mes Pokémons Favoris"
    assert [i["name"] for i in screen["items"]] == ["ivysaur"]


def test_view_action_requiring_name_is_rejected(client: TestClient) -> None:
    response = client.post("/api/catalog/view/actions", json={"type": "select"})
    assert response.status_code == 422

    response = client.post("/api/catalog/view/actions", json={"type": "dance"})
    assert response.status_code == 422


def test_favorites_are_reloaded_at_startup(storage: MemoryStorage) -> None:
    storage.set(KEY, json.dumps([{"identifier": "2", "name": "ivysaur"}]))
    app = create_app(_settings(), storage=storage, transport=make_transport([]))

    with TestClient(app) as test_client:
        assert [f["name"] for f in test_client.get("/api/catalog/favorites").json()] == ["ivysaur"]


def test_startup_load_enriches_catalog() -> None:
    index = [index_entry("bulbasaur", "1"), index_entry("ivysaur", "2")]
    transport = make_transport(index, {"1": "Bulbizarre"}, failing_ids={"2"})
    app = create_app(_settings(load_on_startup=True), storage=MemoryStorage(), transport=transport)

    with TestClient(app) as test_client:
        status = _wait_until_loaded(test_client)
        assert status["progress"] == 100
        assert status["total"] == 2

        pokemon = test_client.get("/api/catalog/pokemon").json()
        assert [(p["identifier"], p["localized_name"]) for p in pokemon] == [
            ("1", "Bulbizarre"),
            ("2", None),
        ]
        assert test_client.get("/api/catalog/pokemon", params={"q": "ivy"}).json()[0]["name"] == "ivysaur"


def test_failed_index_leaves_empty_list_and_favorites_usable(storage: MemoryStorage) -> None:
    storage.set(KEY, json.dumps([{"identifier": "2", "name": "ivysaur"}]))
    transport = make_transport([], index_status=500)
    app = create_app(_settings(load_on_startup=True), storage=storage, transport=transport)

    with TestClient(app) as test_client:
        status = _wait_until_loaded(test_client)
        assert status["loading"] is False

        screen = test_client.get("/api/catalog/view").json()
        assert screen["items"] == []
        assert screen["empty_message"]

        toggled = test_client.post("/api/catalog/favorites/toggle", json={"name": "ivysaur"})
        assert toggled.json()["items"] == []


def test_reload_starts_a_new_pass() -> None:
    index = [index_entry("pikachu", "25")]
    app = create_app(
        _settings(), storage=MemoryStorage(), transport=make_transport(index, {"25": "Pikachu"})
    )

    with TestClient(app) as test_client:
        assert test_client.get("/api/catalog/pokemon").json() == []
        assert test_client.post("/api/catalog/reload").json() == {"started": True}
        _wait_until_loaded(test_client)
        assert test_client.get("/api/catalog/pokemon/25").json()["localized_name"] == "Pikachu"
