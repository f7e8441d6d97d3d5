"""Filmaffinity web scraper.

Searches Filmaffinity by title and reads film pages, using httpx
for fetching and BeautifulSoup for HTML parsing.
"""

import httpx
from bs4 import BeautifulSoup, Tag

from cartelera.etl.aggregation.schemas import Candidate
from cartelera.etl.extractors.base import BaseScraper, ScraperError
from cartelera.etl.extractors.filmaffinity.classifier import (
    clean_title,
    extract_year,
    infer_media_type,
    parse_rating,
)
from cartelera.etl.extractors.filmaffinity.url_builder import FAUrlBuilder
from cartelera.settings import FilmaffinitySettings, settings

DEFAULT_SEARCH_LIMIT = 8


class FilmaffinitySource(BaseScraper):
    """Candidate source backed by Filmaffinity search.

    Usage:
        with FilmaffinitySource() as source:
            candidates = source.search_candidates("Dune 2024")

    Attributes:
        config: Filmaffinity settings in use.
        urls: URL builder for the configured locale.
    """

    name = "filmaffinity"

    # Selectors, newest layout first
    RESULT_SELECTORS = ("div.se-it", "div.movie-card", "li.fa-card")
    TITLE_SELECTORS = (".mc-title a", "a.mc-title", "a[href*='/film']")
    YEAR_SELECTORS = (".ye-w", ".mc-year")
    RATING_SELECTORS = (".avgrat-box", ".fa-avg-rat-box .avg", ".mr-rating .avgrat-box")

    def __init__(
        self,
        config: FilmaffinitySettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize scraper.

        Args:
            config: Filmaffinity settings, global settings when omitted.
            client: Optional pre-built HTTP client.
        """
        self.config = config or settings.filmaffinity
        super().__init__(
            min_request_delay=self.config.min_request_delay,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
            client=client,
        )
        self.urls = FAUrlBuilder(self.config)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def search_candidates(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Candidate]:
        """Search titles and return the first hits.

        A search matching a single title redirects to its film page,
        which is returned as the only candidate.

        Args:
            query: Free-text query.
            limit: Maximum number of candidates.

        Returns:
            Candidates in site order, [] when the site is unavailable.
        """
        if not query.strip():
            return []

        try:
            response = self._fetch(self.urls.search_url, params=self.urls.search_params(query))
        except ScraperError as e:
            self.logger.warning(f"Search failed for '{query}': {e}")
            return []

        final_url = str(response.url)
        if self.urls.is_film_url(final_url):
            candidate = self.parse_film_page(response.text, final_url)
            return [candidate] if candidate else []

        candidates = self.parse_search_results(response.text)[:limit]
        self.logger.debug(f"Search '{query}': {len(candidates)} candidates")
        return candidates

    def fetch_candidate_detail(self, url: str) -> Candidate | None:
        """Read a film page.

        Args:
            url: Film page URL.

        Returns:
            Candidate built from the page, None when unavailable.
        """
        try:
            response = self._fetch(self.urls.build_full_url(url))
        except ScraperError as e:
            self.logger.warning(f"Detail failed for {url}: {e}")
            return None
        return self.parse_film_page(response.text, str(response.url))

    # -------------------------------------------------------------------------
    # Search Page Parsing
    # -------------------------------------------------------------------------

    def parse_search_results(self, html: str) -> list[Candidate]:
        """Parse the search result list.

        Args:
            html: Search page HTML.

        Returns:
            Candidates in page order.
        """
        soup = BeautifulSoup(html, "html.parser")

        items: list[Tag] = []
        for selector in self.RESULT_SELECTORS:
            items = soup.select(selector)
            if items:
                break

        candidates: list[Candidate] = []
        for item in items:
            candidate = self._parse_search_item(item)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def _parse_search_item(self, item: Tag) -> Candidate | None:
        """Build a candidate from one result row."""
        link = self._select_first(item, self.TITLE_SELECTORS)
        if link is None:
            return None

        raw_title = link.get("title") or link.get_text(strip=True)
        if not raw_title:
            return None

        raw_title = str(raw_title)
        title_box = link.parent.get_text(" ", strip=True) if link.parent else raw_title
        year_elem = self._select_first(item, self.YEAR_SELECTORS)
        # Year sits next to the title when there is no year column
        year_text = year_elem.get_text(strip=True) if year_elem else title_box.replace(raw_title, "")
        rating_elem = self._select_first(item, self.RATING_SELECTORS)
        href = link.get("href")

        return Candidate(
            title=clean_title(raw_title),
            type=infer_media_type(title_box),
            year=extract_year(year_text),
            rating=parse_rating(rating_elem.get_text(strip=True) if rating_elem else None),
            url=self.urls.build_full_url(str(href)) if href else None,
        )

    # -------------------------------------------------------------------------
    # Film Page Parsing
    # -------------------------------------------------------------------------

    def parse_film_page(self, html: str, url: str | None = None) -> Candidate | None:
        """Parse a film page.

        Args:
            html: Film page HTML.
            url: Page URL.

        Returns:
            Candidate, or None when the page has no title.
        """
        soup = BeautifulSoup(html, "html.parser")

        title_elem = soup.select_one("h1#main-title span[itemprop='name']") or soup.select_one("h1#main-title")
        if title_elem is None:
            self.logger.debug(f"No title on film page: {url}")
            return None
        raw_title = title_elem.get_text(" ", strip=True)
        if not raw_title:
            return None

        year_elem = soup.select_one("dd[itemprop='datePublished']")
        genre_elem = soup.select_one("dd.card-genres") or soup.select_one("span[itemprop='genre']")
        heading = soup.select_one("h1#main-title")

        return Candidate(
            title=clean_title(raw_title),
            type=infer_media_type(
                heading.get_text(" ", strip=True) if heading else raw_title,
                genre_elem.get_text(" ", strip=True) if genre_elem else None,
            ),
            year=extract_year(year_elem.get_text(strip=True) if year_elem else None),
            rating=self._film_page_rating(soup),
            url=url,
        )

    @staticmethod
    def _film_page_rating(soup: BeautifulSoup) -> float | None:
        """Average rating from the rating box."""
        elem = soup.select_one("#movie-rat-avg")
        if elem is None:
            return None
        content = elem.get("content")
        return parse_rating(str(content) if content else elem.get_text(strip=True))

    @staticmethod
    def _select_first(node: Tag, selectors: tuple[str, ...]) -> Tag | None:
        for selector in selectors:
            found = node.select_one(selector)
            if found is not None:
                return found
        return None
