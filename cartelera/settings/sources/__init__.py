"""Data source settings.

Exports configuration classes for the rating sources:
- TMDB API (catalog)
- OMDb API (numeric ratings)
- Filmaffinity (scraping)
- Rotten Tomatoes (scraping)
"""

from cartelera.settings.sources.filmaffinity import FilmaffinitySettings
from cartelera.settings.sources.omdb import OMDbSettings
from cartelera.settings.sources.rotten_tomatoes import RTSettings
from cartelera.settings.sources.tmdb import TMDBSettings

__all__ = [
    "TMDBSettings",
    "OMDbSettings",
    "FilmaffinitySettings",
    "RTSettings",
]
