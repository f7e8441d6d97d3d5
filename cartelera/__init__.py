"""Cartelera: top movies and series of the moment, rated across sources."""

__version__ = "0.1.0"
