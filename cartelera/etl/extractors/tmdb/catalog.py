"""TMDB catalog.

Discovers recent movies and series in the configured region and
loads their details (external ids, providers, release dates).
"""

import logging
from datetime import date, timedelta

from cartelera.etl.aggregation.schemas import Item, MediaType
from cartelera.etl.extractors.tmdb.client import TMDBClient, TMDBClientError
from cartelera.etl.extractors.tmdb.normalizer import TMDBNormalizer

logger = logging.getLogger(__name__)


class TMDBCatalog:
    """Catalog of recent titles backed by the TMDB API.

    The client must be open (used inside its context manager).

    Attributes:
        client: Open TMDB client.
        normalizer: Payload normalizer.
        max_pages: Discover pages fetched at most per call.
    """

    _GENRE_MEDIA = {MediaType.MOVIE: "movie", MediaType.SERIES: "tv"}

    def __init__(
        self,
        client: TMDBClient,
        normalizer: TMDBNormalizer | None = None,
        max_pages: int = 3,
    ) -> None:
        self.client = client
        self.normalizer = normalizer or TMDBNormalizer(region=client.config.region)
        self.max_pages = max_pages
        self._genres_loaded: set[MediaType] = set()

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def discover(
        self,
        media_type: MediaType,
        days: int,
        limit: int = 20,
        today: date | None = None,
    ) -> list[Item]:
        """Discover titles released in the last ``days`` days.

        Args:
            media_type: MOVIE or SERIES.
            days: Size of the discovery window.
            limit: Maximum number of items returned.
            today: Window end, defaults to today.

        Returns:
            Summary Items ordered by popularity, at most ``limit``.
        """
        end = today or date.today()
        start = end - timedelta(days=days)
        self._load_genres(media_type)

        items: list[Item] = []
        seen: set[int] = set()

        for page in range(1, self.max_pages + 1):
            try:
                response = self._discover_page(media_type, start, end, page)
            except TMDBClientError as e:
                logger.warning(f"Discover failed: {media_type} page={page}: {e}")
                break

            for raw in response.get("results", []):
                item = self.normalizer.normalize_summary(raw, media_type)
                if item is None or item.tmdb_id in seen:
                    continue
                seen.add(item.tmdb_id)
                items.append(item)
                if len(items) >= limit:
                    return items

            if page >= response.get("total_pages", 1):
                break

        logger.debug(f"Discovered {len(items)} {media_type} items ({start} → {end})")
        return items

    def _discover_page(self, media_type: MediaType, start: date, end: date, page: int) -> dict:
        if media_type == MediaType.MOVIE:
            return self.client.discover_movies(release_from=start, release_to=end, page=page)
        return self.client.discover_tv(air_from=start, air_to=end, page=page)

    def _load_genres(self, media_type: MediaType) -> None:
        """Fill the normalizer genre map once per media type."""
        if media_type in self._genres_loaded:
            return
        try:
            response = self.client.get_genres(self._GENRE_MEDIA[media_type])
        except TMDBClientError as e:
            logger.warning(f"Genre list unavailable for {media_type}: {e}")
            return
        for genre in response.get("genres", []):
            self.normalizer.genre_names[genre["id"]] = genre["name"]
        self._genres_loaded.add(media_type)

    # -------------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------------

    def get_item_details(self, tmdb_id: int, media_type: MediaType) -> Item | None:
        """Load one title with its appended responses.

        Args:
            tmdb_id: TMDB identifier.
            media_type: MOVIE or SERIES.

        Returns:
            Detailed Item, or None when the catalog is unavailable.
        """
        try:
            if media_type == MediaType.MOVIE:
                raw = self.client.get_movie_full(tmdb_id)
            else:
                raw = self.client.get_tv_full(tmdb_id)
        except TMDBClientError as e:
            logger.warning(f"Details failed: {media_type} id={tmdb_id}: {e}")
            return None

        return self.normalizer.normalize_details(raw, media_type)

    def complete(self, summary: Item) -> Item:
        """Return the detailed Item, or the summary when details fail."""
        if summary.tmdb_id is None:
            return summary
        return self.get_item_details(summary.tmdb_id, summary.type) or summary
