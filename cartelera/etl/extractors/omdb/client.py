"""OMDb API client.

Looks up a title by IMDb id and returns the IMDb rating together
with the Rotten Tomatoes and Metacritic critic percentages.
"""

import logging
import re
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx

from cartelera.etl.types import OMDbResponse
from cartelera.settings import OMDbSettings, settings

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class OMDbClientError(Exception):
    """Raised when the OMDb API cannot be queried."""

    pass


@dataclass(frozen=True)
class OMDbRatings:
    """Ratings read from one OMDb lookup. Missing values are None."""

    imdb_rating: float | None = None
    rotten_tomatoes: int | None = None
    metacritic: int | None = None

    @classmethod
    def empty(cls) -> "OMDbRatings":
        return cls()


class OMDbClient:
    """HTTP client for the OMDb API.

    Attributes:
        config: OMDb settings in use.
    """

    # Source names used in the "Ratings" array
    RT_SOURCE = "Rotten Tomatoes"
    METACRITIC_SOURCE = "Metacritic"

    def __init__(self, config: OMDbSettings | None = None) -> None:
        """Initialize OMDb client.

        Args:
            config: OMDb settings, global settings when omitted.
        """
        self.config = config or settings.omdb
        self._client: httpx.Client | None = None
        self._cache: dict[str, OMDbRatings] = {}

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> "OMDbClient":
        """Enter context and create HTTP client."""
        self._client = httpx.Client(timeout=self.config.timeout)
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_ratings(self, imdb_id: str | None) -> OMDbRatings:
        """Get every rating OMDb knows for a title.

        Args:
            imdb_id: IMDb identifier (tt1234567).

        Returns:
            OMDbRatings, empty when the id is missing or the lookup fails.
        """
        if not imdb_id:
            return OMDbRatings.empty()
        if imdb_id in self._cache:
            return self._cache[imdb_id]

        try:
            payload = self._lookup(imdb_id)
        except OMDbClientError as e:
            logger.warning(f"OMDb lookup failed for {imdb_id}: {e}")
            return OMDbRatings.empty()

        ratings = self.parse_ratings(payload)
        self._cache[imdb_id] = ratings
        return ratings

    def get_numeric_rating(self, imdb_id: str | None) -> float | None:
        """IMDb rating (0-10) for an IMDb id, None when unknown."""
        return self.get_ratings(imdb_id).imdb_rating

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _lookup(self, imdb_id: str) -> OMDbResponse:
        """Fetch the raw lookup response.

        Raises:
            OMDbClientError: On transport, HTTP or payload errors.
        """
        if self._client is None:
            raise OMDbClientError("Client not initialized. Use context manager.")

        params: dict[str, Any] = {"apikey": self.config.api_key, "i": imdb_id}
        try:
            response = self._client.get(self.config.base_url, params=params)
        except httpx.HTTPError as e:
            raise OMDbClientError(f"transport error: {e}") from e

        if response.status_code != 200:
            raise OMDbClientError(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise OMDbClientError("malformed JSON") from e

        if not isinstance(payload, dict):
            raise OMDbClientError("unexpected payload")
        if payload.get("Response") == "False":
            raise OMDbClientError(payload.get("Error", "no result"))
        return payload

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def parse_ratings(cls, payload: OMDbResponse) -> OMDbRatings:
        """Extract ratings from a lookup response.

        Args:
            payload: OMDb response.

        Returns:
            Parsed ratings; "N/A" and malformed values become None.
        """
        entries = payload.get("Ratings")
        if not isinstance(entries, list):
            entries = []
        sources = {
            entry["Source"]: entry.get("Value")
            for entry in entries
            if isinstance(entry, dict) and isinstance(entry.get("Source"), str)
        }

        metacritic = cls._parse_percent(sources.get(cls.METACRITIC_SOURCE))
        if metacritic is None:
            metacritic = cls._parse_percent(payload.get("Metascore"))

        return OMDbRatings(
            imdb_rating=cls._parse_float(payload.get("imdbRating")),
            rotten_tomatoes=cls._parse_percent(sources.get(cls.RT_SOURCE)),
            metacritic=metacritic,
        )

    @staticmethod
    def _parse_float(value: Any) -> float | None:
        text = "" if value is None else str(value).strip()
        if not text or text == NOT_AVAILABLE:
            return None
        try:
            rating = float(text)
        except ValueError:
            return None
        return rating if 0.0 <= rating <= 10.0 else None

    @staticmethod
    def _parse_percent(value: Any) -> int | None:
        """Parse "87%", "72/100", "72" or 72 into 0-100."""
        text = "" if value is None else str(value).strip()
        if not text or text == NOT_AVAILABLE:
            return None
        match = re.match(r"^(\d{1,3})\s*(?:%|/100)?$", text)
        if not match:
            return None
        percent = int(match.group(1))
        return percent if percent <= 100 else None
