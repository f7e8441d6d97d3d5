"""Unit tests for OMDb API client."""

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from cartelera.etl.extractors.omdb import OMDbClient, OMDbClientError, OMDbRatings
from cartelera.settings import OMDbSettings


@pytest.fixture
def omdb_config() -> OMDbSettings:
    return OMDbSettings(OMDB_API_KEY="omdb_key")


@pytest.fixture
def client(omdb_config: OMDbSettings, mock_http_client: MagicMock) -> OMDbClient:
    omdb = OMDbClient(omdb_config)
    omdb._client = mock_http_client
    return omdb


class TestGetRatings:
    @staticmethod
    def test_parses_all_ratings(
        client: OMDbClient, mock_http_client: MagicMock, make_response, sample_omdb_response: dict[str, Any]
    ) -> None:
        mock_http_client.get.return_value = make_response(json_data=sample_omdb_response)

        ratings = client.get_ratings("tt15239678")

        assert ratings == OMDbRatings(imdb_rating=8.5, rotten_tomatoes=92, metacritic=79)
        params = mock_http_client.get.call_args.kwargs["params"]
        assert params == {"apikey": "omdb_key", "i": "tt15239678"}

    @staticmethod
    @pytest.mark.parametrize("imdb_id", [None, ""])
    def test_missing_id_short_circuits(client: OMDbClient, mock_http_client: MagicMock, imdb_id: str | None) -> None:
        assert client.get_ratings(imdb_id) == OMDbRatings.empty()
        assert client.get_numeric_rating(imdb_id) is None
        mock_http_client.get.assert_not_called()

    @staticmethod
    def test_cached_per_id(
        client: OMDbClient, mock_http_client: MagicMock, make_response, sample_omdb_response: dict[str, Any]
    ) -> None:
        mock_http_client.get.return_value = make_response(json_data=sample_omdb_response)

        client.get_ratings("tt15239678")
        assert client.get_numeric_rating("tt15239678") == 8.5

        assert mock_http_client.get.call_count == 1

    @staticmethod
    def test_not_found(client: OMDbClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(
            json_data={"Response": "False", "Error": "Incorrect IMDb ID."}
        )
        assert client.get_ratings("tt0000001") == OMDbRatings.empty()

    @staticmethod
    def test_http_error(client: OMDbClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(status_code=401)
        assert client.get_numeric_rating("tt15239678") is None

    @staticmethod
    def test_transport_error(client: OMDbClient, mock_http_client: MagicMock) -> None:
        mock_http_client.get.side_effect = httpx.ReadTimeout("slow")
        assert client.get_ratings("tt15239678") == OMDbRatings.empty()

    @staticmethod
    def test_malformed_json(client: OMDbClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(text="<html>")
        assert client.get_ratings("tt15239678") == OMDbRatings.empty()

    @staticmethod
    def test_unexpected_payload(client: OMDbClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data=["nope"])
        assert client.get_ratings("tt15239678") == OMDbRatings.empty()

    @staticmethod
    def test_malformed_ratings_degrade(client: OMDbClient, mock_http_client: MagicMock, make_response) -> None:
        payload = {"Response": "True", "imdbRating": "7.1", "Ratings": None, "Metascore": 71}
        mock_http_client.get.return_value = make_response(json_data=payload)

        ratings = client.get_ratings("tt1234567")

        assert ratings == OMDbRatings(imdb_rating=7.1, rotten_tomatoes=None, metacritic=71)

    @staticmethod
    def test_lookup_outside_context(omdb_config: OMDbSettings) -> None:
        with pytest.raises(OMDbClientError):
            OMDbClient(omdb_config)._lookup("tt15239678")


class TestParseRatings:
    @staticmethod
    def test_not_available_values() -> None:
        payload = {"imdbRating": "N/A", "Metascore": "N/A", "Ratings": []}
        assert OMDbClient.parse_ratings(payload) == OMDbRatings.empty()

    @staticmethod
    def test_metascore_fallback() -> None:
        payload = {"imdbRating": "7.1", "Metascore": "64", "Ratings": []}
        ratings = OMDbClient.parse_ratings(payload)
        assert ratings.metacritic == 64
        assert ratings.rotten_tomatoes is None

    @staticmethod
    def test_out_of_range_rejected() -> None:
        payload = {
            "imdbRating": "12.0",
            "Ratings": [{"Source": "Rotten Tomatoes", "Value": "120%"}],
        }
        assert OMDbClient.parse_ratings(payload) == OMDbRatings.empty()

    @staticmethod
    @pytest.mark.parametrize(
        "value,expected",
        [("87%", 87), ("72/100", 72), (" 5 ", 5), ("100%", 100), ("abc", None), ("7.5/10", None)],
    )
    def test_percent_formats(value: str, expected: int | None) -> None:
        assert OMDbClient._parse_percent(value) == expected

    @staticmethod
    def test_bad_float() -> None:
        assert OMDbClient._parse_float("seven") is None

    @staticmethod
    def test_malformed_entries_skipped() -> None:
        payload = {
            "imdbRating": 6.4,
            "Ratings": ["oops", None, {"Source": ["x"], "Value": "1%"}, {"Source": "Rotten Tomatoes", "Value": 88}],
        }
        assert OMDbClient.parse_ratings(payload) == OMDbRatings(imdb_rating=6.4, rotten_tomatoes=88, metacritic=None)

    @staticmethod
    @pytest.mark.parametrize("ratings", [None, "N/A", {"Source": "Metacritic"}])
    def test_ratings_not_a_list(ratings: Any) -> None:
        payload = {"imdbRating": "N/A", "Ratings": ratings}
        assert OMDbClient.parse_ratings(payload) == OMDbRatings.empty()
