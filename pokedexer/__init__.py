"""Pokedexer: incremental catalog collection and daily record selection."""

__version__ = "0.1.0"
