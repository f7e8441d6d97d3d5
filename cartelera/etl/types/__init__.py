"""Raw source data types package.

Exports the TypedDict definitions of the payloads returned by
the catalog and rating APIs.

Usage:
    from cartelera.etl.types import TMDBDetailData, OMDbResponse
"""

from cartelera.etl.types.omdb import OMDbRatingEntry, OMDbResponse
from cartelera.etl.types.tmdb import (
    TMDBCountryReleasesData,
    TMDBDetailData,
    TMDBDiscoverItemData,
    TMDBDiscoverResponse,
    TMDBGenreData,
    TMDBProviderData,
    TMDBRegionProvidersData,
    TMDBReleaseDateData,
    TMDBSeasonData,
)

__all__ = [
    # TMDB
    "TMDBGenreData",
    "TMDBProviderData",
    "TMDBRegionProvidersData",
    "TMDBReleaseDateData",
    "TMDBCountryReleasesData",
    "TMDBSeasonData",
    "TMDBDiscoverItemData",
    "TMDBDetailData",
    "TMDBDiscoverResponse",
    # OMDb
    "OMDbRatingEntry",
    "OMDbResponse",
]
