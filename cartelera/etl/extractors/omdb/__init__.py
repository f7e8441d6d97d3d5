"""OMDb extractor package.

Numeric ratings (IMDb) and critic percentages by IMDb id.
"""

from cartelera.etl.extractors.omdb.client import OMDbClient, OMDbClientError, OMDbRatings

__all__ = [
    "OMDbClient",
    "OMDbClientError",
    "OMDbRatings",
]
