"""ETL extractors package.

Provides data extraction from the catalog and rating sources:
- TMDB: Catalog of recent movies and series
- OMDb: IMDb rating and critic percentages
- Filmaffinity: Scraped rating (title search)
- Rotten Tomatoes: Audience score

Classes:
    BaseScraper: Shared HTTP session and throttle for scraped sources.
"""

from cartelera.etl.extractors.base import BaseScraper, ScraperError
from cartelera.etl.extractors.filmaffinity import FilmaffinitySource
from cartelera.etl.extractors.omdb import OMDbClient, OMDbClientError, OMDbRatings
from cartelera.etl.extractors.rotten_tomatoes import RTAudienceScraper
from cartelera.etl.extractors.tmdb import (
    TMDBCatalog,
    TMDBClient,
    TMDBClientError,
    TMDBNormalizer,
    TMDBNotFoundError,
    TMDBRateLimitError,
)

__all__ = [
    # Base
    "BaseScraper",
    "ScraperError",
    # TMDB
    "TMDBCatalog",
    "TMDBClient",
    "TMDBNormalizer",
    "TMDBClientError",
    "TMDBRateLimitError",
    "TMDBNotFoundError",
    # OMDb
    "OMDbClient",
    "OMDbClientError",
    "OMDbRatings",
    # Scraped sources
    "FilmaffinitySource",
    "RTAudienceScraper",
]
