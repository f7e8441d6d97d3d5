"""TMDB extractor package.

Provides the catalog of recent movies and series from The Movie Database API.

Classes:
    TMDBCatalog: Discovery and details loading.
    TMDBClient: HTTP client with rate limiting.
    TMDBNormalizer: Payload transformation to Items.

Exceptions:
    TMDBClientError: Base client error.
    TMDBRateLimitError: Rate limit exceeded.
    TMDBNotFoundError: Resource not found.

Usage:
    from cartelera.etl.extractors.tmdb import TMDBCatalog, TMDBClient

    with TMDBClient() as client:
        items = TMDBCatalog(client).discover(MediaType.MOVIE, days=45)
"""

from cartelera.etl.extractors.tmdb.catalog import TMDBCatalog
from cartelera.etl.extractors.tmdb.client import (
    TMDBClient,
    TMDBClientError,
    TMDBNotFoundError,
    TMDBRateLimitError,
)
from cartelera.etl.extractors.tmdb.normalizer import TMDBNormalizer

__all__ = [
    "TMDBCatalog",
    "TMDBClient",
    "TMDBNormalizer",
    "TMDBClientError",
    "TMDBRateLimitError",
    "TMDBNotFoundError",
]
