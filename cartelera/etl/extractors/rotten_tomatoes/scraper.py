"""Rotten Tomatoes audience score scraper.

Tries slug URL variants for a title and reads the audience score
from the scorecard JSON embedded in the page.
"""

import json
from typing import Any

import httpx
from bs4 import BeautifulSoup

from cartelera.etl.aggregation.schemas import MediaType
from cartelera.etl.extractors.base import BaseScraper, ScraperError
from cartelera.etl.extractors.rotten_tomatoes.url_builder import RTUrlBuilder
from cartelera.settings import RTSettings, settings

# Year tolerance for matching RT vs source year
YEAR_TOLERANCE = 1


class RTAudienceScraper(BaseScraper):
    """Reads Rotten Tomatoes audience scores.

    Attributes:
        config: RT settings in use.
        urls: URL builder.
    """

    name = "rotten_tomatoes"

    def __init__(
        self,
        config: RTSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize scraper.

        Args:
            config: RT settings, global settings when omitted.
            client: Optional pre-built HTTP client.
        """
        self.config = config or settings.rt
        super().__init__(
            min_request_delay=self.config.min_request_delay,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
            client=client,
        )
        self.urls = RTUrlBuilder(self.config.base_url)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_audience_score(
        self,
        title: str,
        year: int | None,
        media_type: MediaType,
    ) -> int | None:
        """Audience percentage of the first page variant that has one.

        Args:
            title: Title, preferably the original one.
            year: Release year, used for slug variants and validation.
            media_type: MOVIE or SERIES.

        Returns:
            Audience score (0-100), None when no page matches.
        """
        if not self.config.enabled or not title.strip():
            return None

        for film_url in self.urls.generate_url_variants(title, year, media_type):
            scorecard = self._fetch_scorecard(film_url)
            if scorecard is None:
                continue

            page_year = self._scorecard_year(scorecard)
            if year and page_year and abs(page_year - year) > YEAR_TOLERANCE:
                self.logger.debug(f"Year mismatch on {film_url}: {page_year} vs {year}")
                continue

            score = self.extract_audience_score(scorecard)
            if score is not None:
                self.logger.debug(f"✅ Audience score {score}% from {film_url}")
                return score

        return None

    # -------------------------------------------------------------------------
    # Page Fetching
    # -------------------------------------------------------------------------

    def _fetch_scorecard(self, film_url: str) -> dict[str, Any] | None:
        """Scorecard JSON of a page, None when unavailable."""
        try:
            response = self._fetch(self.urls.build_full_url(film_url))
        except ScraperError as e:
            self.logger.debug(f"RT page unavailable: {e}")
            return None
        if self.urls.extract_slug(str(response.url)) is None:
            self.logger.debug(f"Redirected off a title page: {response.url}")
            return None
        return self.parse_scorecard(response.text)

    # -------------------------------------------------------------------------
    # JSON Scorecard Extraction
    # -------------------------------------------------------------------------

    def parse_scorecard(self, html: str) -> dict[str, Any] | None:
        """Extract JSON data from embedded script tag.

        Args:
            html: Page HTML.

        Returns:
            Parsed JSON dict or None.
        """
        soup = BeautifulSoup(html, "html.parser")
        script_tag = soup.select_one("script#media-scorecard-json")
        if not script_tag or not script_tag.string:
            return None

        try:
            data = json.loads(script_tag.string.strip())
        except json.JSONDecodeError:
            self.logger.debug("Failed to parse scorecard JSON")
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def extract_audience_score(scorecard: dict[str, Any]) -> int | None:
        """Audience score (0-100) from scorecard JSON.

        Args:
            scorecard: JSON scorecard data.

        Returns:
            Score, or None when absent or malformed.
        """
        audience = scorecard.get("audienceScore")
        if not isinstance(audience, dict):
            return None

        score = audience.get("score")
        if score in (None, ""):
            return None
        try:
            value = int(score)
        except (TypeError, ValueError):
            return None
        return value if 0 <= value <= 100 else None

    @staticmethod
    def _scorecard_year(scorecard: dict[str, Any]) -> int | None:
        """Release year in the scorecard overlay, when present."""
        overlay = scorecard.get("overlay") or {}
        media = overlay.get("mediaInfo") or scorecard.get("mediaInfo") or {}
        year = media.get("releaseYear") if isinstance(media, dict) else None
        try:
            return int(year) if year else None
        except (TypeError, ValueError):
            return None
