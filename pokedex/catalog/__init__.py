"""
Catalog package for the Pokédex API.

This package loads the national Pokédex from the public PokéAPI,
enriches every entry with its localized (French by default) name and
exposes a small REST API on top of it: list with search and
favorites-only filter, detail lookup, load progress, favorites
toggling and the view state used by the front‑end.  The routes live in
``router`` and are mounted by ``pokedex.main``.
"""
