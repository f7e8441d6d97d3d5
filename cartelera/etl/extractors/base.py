"""Base scraper class.

Provides the HTTP session, throttling and logging shared by
the HTML-scraped rating sources.
"""

import logging
from abc import ABC
from types import TracebackType
from typing import Any, Self

import httpx

from cartelera.etl.utils.throttle import RequestThrottle


class ScraperError(Exception):
    """Raised when a scraped page cannot be fetched."""

    pass


class BaseScraper(ABC):
    """Abstract base class for scraped sources.

    Every request goes through the throttle. Public methods of
    subclasses convert ScraperError into "no data".

    Attributes:
        name: Scraper identifier (e.g., 'filmaffinity', 'rt').
        throttle: Fixed-delay throttle guarding every request.
        logger: Logger instance for this scraper.
    """

    name: str = "base"

    def __init__(
        self,
        min_request_delay: float,
        timeout: float,
        user_agent: str,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize base scraper.

        Args:
            min_request_delay: Pause before each request (seconds).
            timeout: Request timeout (seconds).
            user_agent: HTTP User-Agent header.
            client: Pre-built HTTP client (tests), created on enter otherwise.
        """
        self._logger = logging.getLogger(f"etl.{self.name}")
        self.throttle = RequestThrottle(min_request_delay)
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent, "Accept-Language": "es-ES,es;q=0.9,en;q=0.8"}
        self._client = client
        self._owns_client = client is None

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> Self:
        """Enter context and create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
            )
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close the HTTP client it created."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _fetch(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Throttled GET returning a 200 response.

        Args:
            url: Absolute URL.
            params: Optional query parameters.

        Returns:
            Successful HTTP response.

        Raises:
            ScraperError: On transport errors or non-200 status.
        """
        if self._client is None:
            raise ScraperError("Client not initialized. Use context manager.")

        self.throttle.wait()

        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise ScraperError(f"{self.name} request failed: {url}: {e}") from e

        if response.status_code != 200:
            raise ScraperError(f"{self.name} HTTP {response.status_code}: {url}")

        return response
