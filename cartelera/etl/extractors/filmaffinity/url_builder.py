"""Filmaffinity URL builder."""

import re
from urllib.parse import urljoin

from cartelera.settings import FilmaffinitySettings

_FILM_PATH_PATTERN = re.compile(r"/film\d+\.html")


class FAUrlBuilder:
    """Builds search and film URLs for one Filmaffinity locale."""

    def __init__(self, config: FilmaffinitySettings) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.search_url = config.search_url

    @staticmethod
    def search_params(query: str) -> dict[str, str]:
        """Query string of a title search."""
        return {"stype": "title", "stext": query}

    def build_full_url(self, href: str) -> str:
        """Absolute URL from a link found on a page.

        Args:
            href: Relative or absolute link.

        Returns:
            Complete URL.
        """
        if href.startswith("http"):
            return href
        return urljoin(f"{self.base_url}/", href.lstrip("/"))

    @staticmethod
    def is_film_url(url: str) -> bool:
        """True for film pages (e.g. /es/film123456.html)."""
        return bool(_FILM_PATH_PATTERN.search(url))
