"""Shared pytest fixtures for the ratings pipeline tests."""

from datetime import date
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from cartelera.etl.aggregation.schemas import Candidate, Item, MediaType


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env vars for reproducible tests."""
    monkeypatch.setenv("TMDB_API_KEY", "test_api_key_12345678901234567890")
    monkeypatch.setenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    monkeypatch.setenv("OMDB_API_KEY", "test_omdb_key")
    monkeypatch.setenv("FA_MIN_REQUEST_DELAY", "0")
    monkeypatch.setenv("RT_MIN_REQUEST_DELAY", "0")

    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")


# =============================================================================
# HTTP HELPERS
# =============================================================================


def _build_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
    url: str = "https://example.test/",
) -> MagicMock:
    """Fake httpx.Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.text = text
    response.url = httpx.URL(url)
    response.headers = {}
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("no JSON")
    return response


@pytest.fixture
def make_response():
    """Factory of fake httpx responses."""
    return _build_response


@pytest.fixture
def mock_http_client() -> MagicMock:
    """Fake httpx.Client; set `.get.return_value` or `.get.side_effect`."""
    return MagicMock(spec=httpx.Client)


# =============================================================================
# DOMAIN OBJECTS
# =============================================================================


@pytest.fixture
def sample_movie() -> Item:
    """Catalog movie."""
    return Item(
        tmdb_id=693134,
        imdb_id="tt15239678",
        type=MediaType.MOVIE,
        title_primary="Dune: Parte dos",
        title_original="Dune: Part Two",
        year=2024,
        release_date=date(2024, 3, 1),
        platforms=["Max"],
        genres=["Ciencia ficción", "Aventura"],
        vote_average=8.2,
    )


@pytest.fixture
def sample_series() -> Item:
    """Catalog series."""
    return Item(
        tmdb_id=136315,
        imdb_id="tt14452776",
        type=MediaType.SERIES,
        title_primary="The Bear",
        title_original="The Bear",
        year=2022,
        release_date=date(2024, 6, 26),
        platforms=["Disney Plus"],
        genres=["Comedia", "Drama"],
        vote_average=8.0,
    )


@pytest.fixture
def dune_candidates() -> list[Candidate]:
    """Search hits for "Dune"."""
    return [
        Candidate(title="Dune: Parte Dos", type=MediaType.MOVIE, year=2024, rating=7.8),
        Candidate(title="Duna 1984", type=MediaType.MOVIE, year=1984, rating=6.5),
    ]


# =============================================================================
# TMDB PAYLOADS
# =============================================================================


@pytest.fixture
def sample_tmdb_discover_movie() -> dict[str, Any]:
    """Movie summary from /discover/movie."""
    return {
        "id": 693134,
        "title": "Dune: Parte dos",
        "original_title": "Dune: Part Two",
        "release_date": "2024-02-27",
        "genre_ids": [878, 12],
        "vote_average": 8.2,
        "vote_count": 5400,
        "popularity": 310.5,
    }


@pytest.fixture
def sample_tmdb_movie_details(sample_tmdb_discover_movie: dict[str, Any]) -> dict[str, Any]:
    """Movie details with appended responses."""
    return {
        **sample_tmdb_discover_movie,
        "genres": [{"id": 878, "name": "Ciencia ficción"}, {"id": 12, "name": "Aventura"}],
        "imdb_id": "tt15239678",
        "external_ids": {"imdb_id": "tt15239678"},
        "watch/providers": {
            "results": {
                "ES": {
                    "flatrate": [{"provider_id": 1899, "provider_name": "Max"}],
                    "rent": [{"provider_id": 2, "provider_name": "Apple TV"}],
                },
                "US": {"flatrate": [{"provider_id": 8, "provider_name": "Netflix"}]},
            }
        },
        "release_dates": {
            "results": [
                {
                    "iso_3166_1": "ES",
                    "release_dates": [
                        {"release_date": "2024-03-01T00:00:00.000Z", "type": 3},
                        {"release_date": "2024-05-10T00:00:00.000Z", "type": 4},
                    ],
                },
                {
                    "iso_3166_1": "US",
                    "release_dates": [{"release_date": "2024-03-01T00:00:00.000Z", "type": 3}],
                },
            ]
        },
    }


@pytest.fixture
def sample_tmdb_tv_details() -> dict[str, Any]:
    """Series details with appended responses."""
    return {
        "id": 136315,
        "name": "The Bear",
        "original_name": "The Bear",
        "first_air_date": "2022-06-23",
        "vote_average": 8.0,
        "genres": [{"id": 35, "name": "Comedia"}, {"id": 18, "name": "Drama"}],
        "external_ids": {"imdb_id": "tt14452776"},
        "seasons": [
            {"season_number": 0, "air_date": None},
            {"season_number": 1, "air_date": "2022-06-23"},
            {"season_number": 3, "air_date": "2024-06-26"},
            {"season_number": 4, "air_date": "2099-06-25"},
        ],
        "watch/providers": {
            "results": {"ES": {"flatrate": [{"provider_id": 337, "provider_name": "Disney Plus"}]}}
        },
    }


# =============================================================================
# OMDB PAYLOADS
# =============================================================================


@pytest.fixture
def sample_omdb_response() -> dict[str, Any]:
    """OMDb lookup by IMDb id."""
    return {
        "Title": "Dune: Part Two",
        "Year": "2024",
        "Type": "movie",
        "imdbID": "tt15239678",
        "imdbRating": "8.5",
        "Metascore": "79",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "8.5/10"},
            {"Source": "Rotten Tomatoes", "Value": "92%"},
            {"Source": "Metacritic", "Value": "79/100"},
        ],
        "Response": "True",
    }


# =============================================================================
# HTML FIXTURES
# =============================================================================


@pytest.fixture
def fa_search_html() -> str:
    """Filmaffinity search result page."""
    return """
    <html><body>
      <div class="se-it">
        <div class="mc-title">
          <a href="/es/film123456.html" title="Dune: Parte Dos">Dune: Parte Dos</a>
        </div>
        <div class="ye-w">2024</div>
        <div class="avgrat-box">7,8</div>
      </div>
      <div class="se-it">
        <div class="mc-title">
          <a href="/es/film654321.html" title="Dune">Dune</a> (Serie de TV)
        </div>
        <div class="ye-w">2000</div>
        <div class="avgrat-box">--</div>
      </div>
      <div class="se-it">
        <div class="mc-title"><a href="/es/film111111.html">Duna</a></div>
        <div class="ye-w">1984</div>
        <div class="avgrat-box">6,5</div>
      </div>
    </body></html>
    """


@pytest.fixture
def fa_film_html() -> str:
    """Filmaffinity film page."""
    return """
    <html><body>
      <h1 id="main-title"><span itemprop="name">The Bear</span> (Serie de TV)</h1>
      <dl class="movie-info">
        <dd itemprop="datePublished">2022</dd>
        <dd class="card-genres"><span itemprop="genre">Serie de TV. Comedia. Drama</span></dd>
      </dl>
      <div id="movie-rat-avg" itemprop="ratingValue" content="7,9">7,9</div>
    </body></html>
    """


@pytest.fixture
def rt_page_html() -> str:
    """Rotten Tomatoes page with the scorecard JSON."""
    return """
    <html><body>
      <script id="media-scorecard-json" type="application/json">
        {"audienceScore": {"score": "95", "reviewCount": 5000},
         "criticsScore": {"score": "92"},
         "overlay": {"mediaInfo": {"releaseYear": "2024"}}}
      </script>
    </body></html>
    """
