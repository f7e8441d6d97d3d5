"""Rotten Tomatoes extractor package.

Audience scores read from movie and series pages.

Classes:
    RTAudienceScraper: Audience score lookup.
    RTUrlBuilder: URL generation and slug handling.

Usage:
    from cartelera.etl.extractors.rotten_tomatoes import RTAudienceScraper

    with RTAudienceScraper() as rt:
        score = rt.get_audience_score("The Shining", 1980, MediaType.MOVIE)
"""

from cartelera.etl.extractors.rotten_tomatoes.scraper import RTAudienceScraper
from cartelera.etl.extractors.rotten_tomatoes.url_builder import RTUrlBuilder

__all__ = [
    "RTAudienceScraper",
    "RTUrlBuilder",
]
