"""TMDB API client with rate limiting.

Handles HTTP communication with The Movie Database API
including authentication, rate limiting, and retries.
"""

import logging
import time
from datetime import date
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cartelera.settings import TMDBSettings, settings

logger = logging.getLogger(__name__)


class TMDBClientError(Exception):
    """Base exception for TMDB client errors."""

    pass


class TMDBRateLimitError(TMDBClientError):
    """Raised when rate limit is exceeded."""

    pass


class TMDBNotFoundError(TMDBClientError):
    """Raised when resource is not found."""

    pass


class TMDBClient:
    """HTTP client for TMDB API with rate limiting.

    Implements sliding window rate limiting to respect
    TMDB's API limits (40 requests per 10 seconds).

    Attributes:
        config: TMDB settings in use.
    """

    def __init__(self, config: TMDBSettings | None = None) -> None:
        """Initialize TMDB client.

        Args:
            config: TMDB settings, global settings when omitted.
        """
        self.config = config or settings.tmdb
        self._base_url = self.config.base_url.rstrip("/")
        self._api_key = self.config.api_key
        self._language = self.config.language

        # Rate limiting state
        self._requests_per_period = self.config.requests_per_period
        self._period_seconds = self.config.period_seconds
        self._min_delay = self.config.min_request_delay
        self._request_times: list[float] = []

        # HTTP client
        self._client: httpx.Client | None = None

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> "TMDBClient":
        """Enter context and create HTTP client."""
        self._client = httpx.Client(timeout=self.config.timeout)
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client.

        Args:
            _exc_type: Exception type if raised.
            _exc_val: Exception value if raised.
            _exc_tb: Exception traceback if raised.
        """
        if self._client:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    def _wait_for_rate_limit(self) -> None:
        """Wait if necessary to respect rate limits."""
        now = time.time()

        # Remove old request times outside the window
        cutoff = now - self._period_seconds
        self._request_times = [t for t in self._request_times if t > cutoff]

        if len(self._request_times) >= self._requests_per_period:
            oldest = self._request_times[0]
            wait_time = oldest + self._period_seconds - now
            if wait_time > 0:
                logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                time.sleep(wait_time)

        # Enforce minimum delay between requests
        if self._request_times:
            elapsed = now - self._request_times[-1]
            if elapsed < self._min_delay:
                time.sleep(self._min_delay - elapsed)

        self._request_times.append(time.time())

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute GET request with rate limiting and retries.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On API or transport errors, including timeouts
                still failing after the last retry.
            TMDBNotFoundError: When resource not found.
            TMDBRateLimitError: When rate limit exceeded.
        """
        try:
            return self._request(endpoint, params)
        except httpx.TimeoutException as e:
            raise TMDBClientError(f"TMDB timeout on {endpoint}: {e}") from e

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, TMDBRateLimitError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Single GET attempt; timeouts and 429s are retried."""
        if self._client is None:
            msg = "Client not initialized. Use context manager."
            raise TMDBClientError(msg)

        self._wait_for_rate_limit()

        request_params: dict[str, Any] = {"api_key": self._api_key, "language": self._language}
        if params:
            request_params.update(params)

        url = f"{self._base_url}{endpoint}"

        try:
            response = self._client.get(url, params=request_params)
        except httpx.TimeoutException:
            logger.warning(f"Request timeout: {endpoint}")
            raise
        except httpx.HTTPError as e:
            raise TMDBClientError(f"TMDB transport error on {endpoint}: {e}") from e

        return self._handle_response(response, endpoint)

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            endpoint: API endpoint (for logging).

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On API errors or a body that is not a JSON object.
            TMDBNotFoundError: When resource not found (404).
            TMDBRateLimitError: When rate limit exceeded (429).
        """
        if response.status_code == 200:
            try:
                data = response.json()
            except ValueError as e:
                raise TMDBClientError(f"Malformed JSON from {endpoint}") from e
            if not isinstance(data, dict):
                raise TMDBClientError(f"Unexpected payload from {endpoint}")
            return data

        if response.status_code == 404:
            raise TMDBNotFoundError(f"Not found: {endpoint}")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "10")
            logger.warning(f"Rate limited. Retry after {retry_after}s")
            raise TMDBRateLimitError(f"Rate limited: {endpoint}")

        error_msg = f"TMDB API error {response.status_code}: {endpoint}"
        logger.error(error_msg)
        raise TMDBClientError(error_msg)

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    def discover_movies(
        self,
        release_from: date,
        release_to: date,
        page: int = 1,
        sort_by: str = "popularity.desc",
    ) -> dict[str, Any]:
        """Discover movies released in the configured region.

        Args:
            release_from: First release date included.
            release_to: Last release date included.
            page: Page number (1-500).
            sort_by: Sort order.

        Returns:
            Discover response with results.
        """
        params: dict[str, Any] = {
            "page": page,
            "sort_by": sort_by,
            "region": self.config.region,
            "primary_release_date.gte": release_from.isoformat(),
            "primary_release_date.lte": release_to.isoformat(),
        }
        return self._get("/discover/movie", params)

    def discover_tv(
        self,
        air_from: date,
        air_to: date,
        page: int = 1,
        sort_by: str = "popularity.desc",
    ) -> dict[str, Any]:
        """Discover series first aired within a date range.

        Args:
            air_from: First air date included.
            air_to: Last air date included.
            page: Page number (1-500).
            sort_by: Sort order.

        Returns:
            Discover response with results.
        """
        params: dict[str, Any] = {
            "page": page,
            "sort_by": sort_by,
            "first_air_date.gte": air_from.isoformat(),
            "first_air_date.lte": air_to.isoformat(),
        }
        return self._get("/discover/tv", params)

    def get_movie_full(self, movie_id: int) -> dict[str, Any]:
        """Get movie with external ids, providers and release dates.

        Uses append_to_response for efficiency.

        Args:
            movie_id: TMDB movie ID.

        Returns:
            Movie details with appended responses.
        """
        params: dict[str, Any] = {"append_to_response": "external_ids,watch/providers,release_dates"}
        return self._get(f"/movie/{movie_id}", params)

    def get_tv_full(self, tv_id: int) -> dict[str, Any]:
        """Get series with external ids and providers.

        Args:
            tv_id: TMDB series ID.

        Returns:
            Series details with appended responses.
        """
        params: dict[str, Any] = {"append_to_response": "external_ids,watch/providers"}
        return self._get(f"/tv/{tv_id}", params)

    def get_genres(self, media: str = "movie") -> dict[str, Any]:
        """Get list of genres.

        Args:
            media: "movie" or "tv".

        Returns:
            Genres response with list of genre objects.
        """
        return self._get(f"/genre/{media}/list")
