"""TMDB API data types.

TypedDict definitions for data structures returned by
The Movie Database (TMDB) API endpoints.
"""

from typing import NotRequired, TypedDict


class TMDBGenreData(TypedDict):
    """Genre data from TMDB API."""

    id: int
    name: str


class TMDBProviderData(TypedDict):
    """Watch provider entry."""

    provider_id: int
    provider_name: str
    display_priority: NotRequired[int]


class TMDBRegionProvidersData(TypedDict, total=False):
    """Watch providers available in one region."""

    link: str
    flatrate: list[TMDBProviderData]
    free: list[TMDBProviderData]
    ads: list[TMDBProviderData]
    rent: list[TMDBProviderData]
    buy: list[TMDBProviderData]


class TMDBReleaseDateData(TypedDict):
    """Single dated release (theatrical, digital...)."""

    release_date: str
    type: int
    certification: NotRequired[str]


class TMDBCountryReleasesData(TypedDict):
    """Releases in one country."""

    iso_3166_1: str
    release_dates: list[TMDBReleaseDateData]


class TMDBSeasonData(TypedDict, total=False):
    """Season summary in a series detail response."""

    season_number: int
    air_date: str | None
    name: str


class TMDBDiscoverItemData(TypedDict, total=False):
    """Movie or series summary from a discover endpoint.

    Movies use title/original_title/release_date, series use
    name/original_name/first_air_date.
    """

    id: int
    title: str
    original_title: str
    release_date: str
    name: str
    original_name: str
    first_air_date: str
    genre_ids: list[int]
    vote_average: float
    vote_count: int
    popularity: float


class TMDBDetailData(TMDBDiscoverItemData, total=False):
    """Movie or series details with appended responses."""

    genres: list[TMDBGenreData]
    imdb_id: str | None
    external_ids: dict[str, str | None]
    seasons: list[TMDBSeasonData]
    release_dates: dict[str, list[TMDBCountryReleasesData]]


class TMDBDiscoverResponse(TypedDict):
    """Paginated discover response."""

    page: int
    total_pages: int
    total_results: int
    results: list[TMDBDiscoverItemData]
