"""Filmaffinity extractor package.

Scraped rating source: title search and film pages.

Classes:
    FilmaffinitySource: Candidate search and film page reader.
    FAUrlBuilder: Search and film URLs.

Functions:
    infer_media_type, extract_year, parse_rating: Best-effort page classifier.
"""

from cartelera.etl.extractors.filmaffinity.classifier import (
    clean_title,
    extract_year,
    infer_media_type,
    parse_rating,
)
from cartelera.etl.extractors.filmaffinity.scraper import FilmaffinitySource
from cartelera.etl.extractors.filmaffinity.url_builder import FAUrlBuilder

__all__ = [
    "FilmaffinitySource",
    "FAUrlBuilder",
    "clean_title",
    "extract_year",
    "infer_media_type",
    "parse_rating",
]
