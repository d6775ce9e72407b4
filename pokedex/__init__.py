"""Pokédex catalog service."""
