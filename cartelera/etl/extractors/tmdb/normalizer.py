"""TMDB data normalizer.

Transforms raw TMDB API responses into catalog Items.
"""

import logging
import re
from datetime import date

from pydantic import ValidationError

from cartelera.etl.aggregation.schemas import IMDB_ID_PATTERN, Item, MediaType
from cartelera.etl.types import (
    TMDBDetailData,
    TMDBDiscoverItemData,
    TMDBRegionProvidersData,
)

logger = logging.getLogger(__name__)


class TMDBNormalizer:
    """Normalizes TMDB payloads into Items.

    Attributes:
        region: Country used for releases and watch providers.
        genre_names: Genre id to name map, used for discover payloads.
    """

    # Release types counted as a local premiere (limited, theatrical)
    THEATRICAL_RELEASE_TYPES = {2, 3}

    # Provider offers that make a title watchable on a platform
    STREAMING_OFFERS = ("flatrate", "free", "ads")

    def __init__(self, region: str = "ES", genre_names: dict[int, str] | None = None) -> None:
        self.region = region
        self.genre_names = genre_names or {}

    # -------------------------------------------------------------------------
    # Item Normalization
    # -------------------------------------------------------------------------

    def normalize_summary(self, raw: TMDBDiscoverItemData, media_type: MediaType) -> Item | None:
        """Build an Item from a discover result.

        Args:
            raw: Discover result.
            media_type: MOVIE or SERIES.

        Returns:
            Item, or None when the payload is unusable.
        """
        release = self._parse_date(self._date_field(raw, media_type))
        genres = [self.genre_names[g] for g in raw.get("genre_ids", []) if g in self.genre_names]
        return self._build_item(raw, media_type, release, genres=genres, platforms=[], imdb_id=None)

    def normalize_details(
        self,
        raw: TMDBDetailData,
        media_type: MediaType,
        today: date | None = None,
    ) -> Item | None:
        """Build an Item from a details response with appended data.

        Args:
            raw: Details response.
            media_type: MOVIE or SERIES.
            today: Reference day for series seasons.

        Returns:
            Item, or None when the payload is unusable.
        """
        if media_type == MediaType.MOVIE:
            release = self._local_release_date(raw) or self._parse_date(raw.get("release_date"))
        else:
            release = self._latest_season_date(raw, today or date.today())
            release = release or self._parse_date(raw.get("first_air_date"))

        genres = [g["name"] for g in raw.get("genres", []) if g.get("name")]
        platforms = self._platforms(raw)
        imdb_id = raw.get("imdb_id") or (raw.get("external_ids") or {}).get("imdb_id")

        return self._build_item(raw, media_type, release, genres=genres, platforms=platforms, imdb_id=imdb_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_item(
        self,
        raw: TMDBDiscoverItemData,
        media_type: MediaType,
        release: date | None,
        genres: list[str],
        platforms: list[str],
        imdb_id: str | None,
    ) -> Item | None:
        """Assemble and validate an Item."""
        if media_type == MediaType.MOVIE:
            title, original = raw.get("title"), raw.get("original_title")
            first_date = self._parse_date(raw.get("release_date"))
        else:
            title, original = raw.get("name"), raw.get("original_name")
            first_date = self._parse_date(raw.get("first_air_date"))

        year_source = first_date or release
        vote = raw.get("vote_average")

        try:
            return Item(
                tmdb_id=raw.get("id"),
                imdb_id=imdb_id if self._valid_imdb_id(imdb_id) else None,
                type=media_type,
                title_primary=title or None,
                title_original=original or None,
                year=year_source.year if year_source else None,
                release_date=release,
                platforms=platforms,
                genres=genres,
                vote_average=vote if vote else None,
            )
        except ValidationError as e:
            logger.warning(f"Invalid TMDB payload id={raw.get('id')}: {e.error_count()} errors")
            return None

    @staticmethod
    def _date_field(raw: TMDBDiscoverItemData, media_type: MediaType) -> str | None:
        return raw.get("release_date") if media_type == MediaType.MOVIE else raw.get("first_air_date")

    def _local_release_date(self, raw: TMDBDetailData) -> date | None:
        """Earliest theatrical release date in the configured region."""
        countries = (raw.get("release_dates") or {}).get("results", [])
        dates: list[date] = []
        for country in countries:
            if country.get("iso_3166_1") != self.region:
                continue
            for release in country.get("release_dates", []):
                if release.get("type") not in self.THEATRICAL_RELEASE_TYPES:
                    continue
                parsed = self._parse_date(release.get("release_date"))
                if parsed:
                    dates.append(parsed)
        return min(dates) if dates else None

    def _latest_season_date(self, raw: TMDBDetailData, today: date) -> date | None:
        """Most recent season air date that is not in the future."""
        aired = [
            parsed
            for season in raw.get("seasons", [])
            if (parsed := self._parse_date(season.get("air_date"))) and parsed <= today
        ]
        return max(aired) if aired else None

    def _platforms(self, raw: TMDBDetailData) -> list[str]:
        """Streaming platforms available in the configured region."""
        providers = (raw.get("watch/providers") or {}).get("results", {})
        region: TMDBRegionProvidersData = providers.get(self.region, {})

        names: list[str] = []
        for offer in self.STREAMING_OFFERS:
            for provider in region.get(offer, []):
                name = provider.get("provider_name")
                if name and name not in names:
                    names.append(name)
        return names

    @staticmethod
    def _valid_imdb_id(imdb_id: str | None) -> bool:
        return bool(imdb_id and re.match(IMDB_ID_PATTERN, imdb_id))

    @staticmethod
    def _parse_date(date_str: str | None) -> date | None:
        """Parse date string to date object.

        Args:
            date_str: Date in YYYY-MM-DD format (may carry a time part).

        Returns:
            Parsed date or None.
        """
        if not date_str:
            return None
        try:
            return date.fromisoformat(date_str[:10])
        except ValueError:
            logger.warning(f"Invalid date format: {date_str}")
            return None
