"""Unit tests for Filmaffinity type/year/rating heuristics."""

import pytest

from cartelera.etl.aggregation.schemas import MediaType
from cartelera.etl.extractors.filmaffinity.classifier import (
    clean_title,
    extract_year,
    infer_media_type,
    parse_rating,
)


class TestInferMediaType:
    @staticmethod
    @pytest.mark.parametrize(
        "text",
        ["The Bear (Serie de TV)", "Shōgun (Miniserie de TV)", "Arcane (Serie de animación)", "Fargo (TV Series)"],
    )
    def test_series_markers(text: str) -> None:
        assert infer_media_type(text) == MediaType.SERIES

    @staticmethod
    @pytest.mark.parametrize("text", ["Película de terror", "Cortometraje", "Telefilm"])
    def test_movie_markers(text: str) -> None:
        assert infer_media_type(text) == MediaType.MOVIE

    @staticmethod
    def test_no_marker_is_unknown() -> None:
        assert infer_media_type("Dune: Parte Dos") == MediaType.UNKNOWN

    @staticmethod
    def test_series_wins() -> None:
        assert infer_media_type("Película", "Serie de TV. Drama") == MediaType.SERIES

    @staticmethod
    def test_empty_inputs() -> None:
        assert infer_media_type() == MediaType.UNKNOWN
        assert infer_media_type(None, "") == MediaType.UNKNOWN

    @staticmethod
    def test_marker_as_whole_words() -> None:
        assert infer_media_type("Seriedad absoluta") == MediaType.UNKNOWN


class TestExtractYear:
    @staticmethod
    @pytest.mark.parametrize(
        "text,expected",
        [("2024", 2024), ("(1984)", 1984), ("2019-2021", 2019), ("Estreno 1895", 1895), ("1234", None), ("", None)],
    )
    def test_years(text: str, expected: int | None) -> None:
        assert extract_year(text) == expected

    @staticmethod
    def test_none() -> None:
        assert extract_year(None) is None


class TestParseRating:
    @staticmethod
    @pytest.mark.parametrize(
        "text,expected",
        [("7,8", 7.8), ("6.5", 6.5), ("10", 10.0), (" 5 ", 5.0), ("--", None), ("", None), ("11", None)],
    )
    def test_ratings(text: str, expected: float | None) -> None:
        assert parse_rating(text) == expected


class TestCleanTitle:
    @staticmethod
    @pytest.mark.parametrize(
        "title,expected",
        [
            ("The Bear (Serie de TV)", "The Bear"),
            ("Shogun (Miniserie de TV)", "Shogun"),
            ("Cortito (C)", "Cortito"),
            ("Especial (TV)", "Especial"),
            ("Alien (1979)", "Alien (1979)"),
            ("Dune", "Dune"),
        ],
    )
    def test_suffixes(title: str, expected: str) -> None:
        assert clean_title(title) == expected
