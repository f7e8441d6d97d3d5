"""Unit tests for TMDB API client."""

from datetime import date
from unittest.mock import MagicMock

import httpx
import pytest

from cartelera.etl.extractors.tmdb.client import (
    TMDBClient,
    TMDBClientError,
    TMDBNotFoundError,
    TMDBRateLimitError,
)
from cartelera.settings import TMDBSettings


@pytest.fixture
def tmdb_config() -> TMDBSettings:
    return TMDBSettings(TMDB_API_KEY="test_key", TMDB_MIN_REQUEST_DELAY=0)


@pytest.fixture
def client(tmdb_config: TMDBSettings, mock_http_client: MagicMock) -> TMDBClient:
    tmdb = TMDBClient(tmdb_config)
    tmdb._client = mock_http_client
    return tmdb


class TestInit:
    @staticmethod
    def test_uses_config(tmdb_config: TMDBSettings) -> None:
        client = TMDBClient(tmdb_config)
        assert client.config is tmdb_config
        assert client._base_url == "https://api.themoviedb.org/3"

    @staticmethod
    def test_context_manager_opens_and_closes(tmdb_config: TMDBSettings) -> None:
        with TMDBClient(tmdb_config) as client:
            assert isinstance(client._client, httpx.Client)
        assert client._client is None

    @staticmethod
    def test_get_outside_context_raises(tmdb_config: TMDBSettings) -> None:
        with pytest.raises(TMDBClientError, match="Client not initialized"):
            TMDBClient(tmdb_config).get_genres()


class TestRequests:
    @staticmethod
    def test_auth_and_language_params(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data={"genres": []})

        client.get_genres("tv")

        url = mock_http_client.get.call_args.args[0]
        params = mock_http_client.get.call_args.kwargs["params"]
        assert url == "https://api.themoviedb.org/3/genre/tv/list"
        assert params["api_key"] == "test_key"
        assert params["language"] == "es-ES"

    @staticmethod
    def test_discover_movies_params(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data={"results": [], "total_pages": 1})

        client.discover_movies(date(2024, 1, 1), date(2024, 2, 15), page=2)

        params = mock_http_client.get.call_args.kwargs["params"]
        assert params["region"] == "ES"
        assert params["page"] == 2
        assert params["primary_release_date.gte"] == "2024-01-01"
        assert params["primary_release_date.lte"] == "2024-02-15"
        assert params["sort_by"] == "popularity.desc"

    @staticmethod
    def test_discover_tv_params(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data={"results": []})

        client.discover_tv(date(2024, 1, 1), date(2024, 3, 1))

        url = mock_http_client.get.call_args.args[0]
        params = mock_http_client.get.call_args.kwargs["params"]
        assert url.endswith("/discover/tv")
        assert params["first_air_date.gte"] == "2024-01-01"

    @staticmethod
    def test_movie_full_appends_responses(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data={"id": 1})

        assert client.get_movie_full(1) == {"id": 1}

        params = mock_http_client.get.call_args.kwargs["params"]
        assert "release_dates" in params["append_to_response"]
        assert "watch/providers" in params["append_to_response"]

    @staticmethod
    def test_tv_full_appends_responses(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data={"id": 2})

        client.get_tv_full(2)

        assert mock_http_client.get.call_args.args[0].endswith("/tv/2")
        assert "external_ids" in mock_http_client.get.call_args.kwargs["params"]["append_to_response"]


class TestErrors:
    @staticmethod
    def test_not_found(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(status_code=404)
        with pytest.raises(TMDBNotFoundError):
            client.get_movie_full(1)

    @staticmethod
    def test_server_error(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(status_code=500)
        with pytest.raises(TMDBClientError):
            client.get_movie_full(1)

    @staticmethod
    def test_transport_error(client: TMDBClient, mock_http_client: MagicMock) -> None:
        mock_http_client.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(TMDBClientError, match="transport error"):
            client.get_movie_full(1)

    @staticmethod
    def test_rate_limit_is_client_error() -> None:
        assert issubclass(TMDBRateLimitError, TMDBClientError)
        assert issubclass(TMDBNotFoundError, TMDBClientError)


class TestRetries:
    @pytest.fixture(autouse=True)
    def no_backoff(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(TMDBClient._request.retry, "sleep", lambda _seconds: None)

    @staticmethod
    def test_timeout_after_retries_is_client_error(client: TMDBClient, mock_http_client: MagicMock) -> None:
        mock_http_client.get.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(TMDBClientError, match="timeout"):
            client.get_movie_full(1)

        assert mock_http_client.get.call_count == 3

    @staticmethod
    def test_timeout_then_success(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.side_effect = [httpx.ReadTimeout("slow"), make_response(json_data={"id": 1})]

        assert client.get_movie_full(1) == {"id": 1}

    @staticmethod
    def test_rate_limit_exhausted(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(status_code=429)

        with pytest.raises(TMDBRateLimitError):
            client.get_genres()

        assert mock_http_client.get.call_count == 3


class TestMalformedBody:
    @staticmethod
    def test_non_json_body(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(text="<html>oops</html>")
        with pytest.raises(TMDBClientError, match="Malformed JSON"):
            client.get_movie_full(1)

    @staticmethod
    def test_non_object_body(client: TMDBClient, mock_http_client: MagicMock, make_response) -> None:
        mock_http_client.get.return_value = make_response(json_data=["unexpected"])
        with pytest.raises(TMDBClientError, match="Unexpected payload"):
            client.get_tv_full(2)
