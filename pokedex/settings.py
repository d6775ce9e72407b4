"""Runtime configuration for the Pokédex service."""
from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PokedexSettings(BaseSettings):
    """Environment-aware settings, read from ``POKEDEX_*`` variables or ``.env``."""

    api_base_url: str = Field(
        "https://pokeapi.co/api/v2", description="Base URL of the public Pokémon API."
    )
    index_limit: int = Field(
        1302, ge=0, description="Page size requested from the index in a single call."
    )
    language: str = Field("fr", description="Language code used for localized names.")
    favorites_key: str = Field(
        "pokedex_favorites", description="Storage key holding the favorites list."
    )
    storage_path: str = Field(
        "data/storage.json",
        description="JSON file used as durable storage. Empty keeps favorites in memory.",
    )
    progress_step: int = Field(
        10, ge=1, description="Emit a progress update every N completed lookups."
    )
    load_on_startup: bool = Field(
        True, description="Start a load pass when the application starts."
    )
    user_agent: str = Field(
        "pokedex-catalog/0.1 (+https://pokeapi.co)",
        description="User-Agent header sent to the API.",
    )

    model_config = SettingsConfigDict(
        env_prefix="POKEDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def storage_file(self) -> Path | None:
        return Path(self.storage_path) if self.storage_path else None
