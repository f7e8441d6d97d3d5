"""Unit tests for pipeline orchestration."""

from datetime import UTC, date, datetime
from unittest.mock import MagicMock, patch

import pytest

from cartelera.etl.aggregation.enricher import RatingsEnricher
from cartelera.etl.aggregation.schemas import Candidate, Item, MediaType
from cartelera.etl.extractors.omdb import OMDbRatings
from cartelera.etl.matching import QueryCascade
from cartelera.etl.pipeline.orchestrator import (
    PipelineOptions,
    PipelineResult,
    PipelineStats,
    run_media_type,
    run_pipeline,
)
from cartelera.settings import ConfigurationError, OMDbSettings, Settings, TMDBSettings

NOW = datetime(2024, 7, 1, tzinfo=UTC)

ORCHESTRATOR = "cartelera.etl.pipeline.orchestrator"


@pytest.fixture
def config() -> Settings:
    return Settings()


@pytest.fixture
def fa_source() -> MagicMock:
    source = MagicMock()
    source.search_candidates.return_value = [
        Candidate(title="Dune: Parte Dos", type=MediaType.MOVIE, year=2024, rating=7.8),
        Candidate(title="The Bear", type=MediaType.SERIES, year=2022, rating=8.1),
    ]
    source.fetch_candidate_detail.return_value = None
    return source


@pytest.fixture
def omdb() -> MagicMock:
    client = MagicMock()
    client.get_ratings.return_value = OMDbRatings(imdb_rating=8.5, rotten_tomatoes=92, metacritic=79)
    return client


@pytest.fixture
def catalog(sample_movie: Item, sample_series: Item) -> MagicMock:
    fake = MagicMock()
    fake.discover.side_effect = lambda media_type, days, limit: (
        [sample_movie] if media_type == MediaType.MOVIE else [sample_series]
    )
    fake.complete.side_effect = lambda summary: summary
    return fake


class TestPipelineOptions:
    @staticmethod
    def test_both_media_types_by_default() -> None:
        assert PipelineOptions().media_types == [MediaType.MOVIE, MediaType.SERIES]

    @staticmethod
    def test_only() -> None:
        assert PipelineOptions(only=MediaType.SERIES).media_types == [MediaType.SERIES]

    @staticmethod
    @pytest.mark.parametrize("top_n", [0, -2])
    def test_non_positive_top_n(top_n: int) -> None:
        with pytest.raises(ValueError, match="top_n"):
            PipelineOptions(top_n=top_n)


class TestPipelineResult:
    @staticmethod
    def test_ranked_for() -> None:
        result = PipelineResult()
        assert result.ranked_for(MediaType.MOVIE) is result.movies
        assert result.ranked_for(MediaType.SERIES) is result.series

    @staticmethod
    def test_stats_log_summary() -> None:
        stats = PipelineStats(started_at=NOW, discovered={"movie": 3}, scored={"movie": 2}, ranked={"movie": 2})
        stats.log_summary()


class TestRunMediaType:
    @staticmethod
    def test_movie_run(catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings) -> None:
        enricher = RatingsEnricher(QueryCascade(fa_source), numeric_source=omdb)
        stats = PipelineStats(started_at=NOW)

        ranked = run_media_type(MediaType.MOVIE, catalog, enricher, PipelineOptions(now=NOW), config, stats)

        assert len(ranked) == 1
        assert ranked[0].signals.scraped == 7.8
        assert ranked[0].signals.numeric_api == 8.5
        catalog.discover.assert_called_once_with(MediaType.MOVIE, days=45, limit=20)
        assert stats.discovered == {"movie": 1}
        assert stats.scored == {"movie": 1}
        assert stats.ranked == {"movie": 1}

    @staticmethod
    def test_series_window(catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings) -> None:
        enricher = RatingsEnricher(QueryCascade(fa_source), numeric_source=omdb)
        stats = PipelineStats(started_at=NOW)
        late = PipelineOptions(now=datetime(2024, 9, 1, tzinfo=UTC))

        ranked = run_media_type(MediaType.SERIES, catalog, enricher, late, config, stats)

        assert ranked == []
        catalog.discover.assert_called_once_with(MediaType.SERIES, days=60, limit=20)
        assert stats.discovered == {"series": 1}
        assert stats.ranked == {"series": 0}

    @staticmethod
    def test_platform_filter_applied(
        catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings
    ) -> None:
        enricher = RatingsEnricher(QueryCascade(fa_source), numeric_source=omdb)
        options = PipelineOptions(platforms=["Netflix"], now=NOW)

        ranked = run_media_type(MediaType.MOVIE, catalog, enricher, options, config, PipelineStats(started_at=NOW))

        assert ranked == []

    @staticmethod
    def test_out_of_window_series_not_enriched(catalog: MagicMock, config: Settings) -> None:
        old_show = Item(tmdb_id=9, type=MediaType.SERIES, title_primary="Old show", release_date=date(2023, 11, 1))
        catalog.discover.side_effect = None
        catalog.discover.return_value = [old_show]
        enricher = MagicMock()
        enricher.enrich_all.return_value = []
        stats = PipelineStats(started_at=NOW)

        ranked = run_media_type(
            MediaType.SERIES, catalog, enricher, PipelineOptions(now=datetime(2024, 1, 10, tzinfo=UTC)), config, stats
        )

        assert ranked == []
        enricher.enrich_all.assert_called_once_with([])
        assert stats.discovered == {"series": 1}

    @staticmethod
    def test_untitled_item_not_enriched(catalog: MagicMock, sample_movie: Item, config: Settings) -> None:
        catalog.discover.side_effect = None
        catalog.discover.return_value = [Item(tmdb_id=3, type=MediaType.MOVIE), sample_movie]
        enricher = MagicMock()
        enricher.enrich_all.return_value = []
        stats = PipelineStats(started_at=NOW)

        run_media_type(MediaType.MOVIE, catalog, enricher, PipelineOptions(now=NOW), config, stats)

        enricher.enrich_all.assert_called_once_with([sample_movie])

    @staticmethod
    def test_explicit_top_n(catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings) -> None:
        enricher = RatingsEnricher(QueryCascade(fa_source), numeric_source=omdb)
        options = PipelineOptions(top_n=1, now=NOW)

        ranked = run_media_type(MediaType.MOVIE, catalog, enricher, options, config, PipelineStats(started_at=NOW))

        assert len(ranked) == 1


class TestRunPipeline:
    @staticmethod
    def test_missing_keys_fatal() -> None:
        config = Settings(tmdb=TMDBSettings(TMDB_API_KEY=""), omdb=OMDbSettings(OMDB_API_KEY=""))
        with pytest.raises(ConfigurationError, match="TMDB_API_KEY"):
            run_pipeline(config=config)

    @staticmethod
    def test_full_run(catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings) -> None:
        with (
            patch(f"{ORCHESTRATOR}.TMDBClient"),
            patch(f"{ORCHESTRATOR}.TMDBCatalog", return_value=catalog),
            patch(f"{ORCHESTRATOR}.OMDbClient") as omdb_cls,
            patch(f"{ORCHESTRATOR}.FilmaffinitySource") as fa_cls,
            patch(f"{ORCHESTRATOR}.RTAudienceScraper") as rt_cls,
        ):
            omdb_cls.return_value.__enter__.return_value = omdb
            fa_cls.return_value.__enter__.return_value = fa_source
            rt_cls.return_value.__enter__.return_value.get_audience_score.return_value = 90

            result = run_pipeline(PipelineOptions(now=NOW), config=config)

        assert [r.item.tmdb_id for r in result.movies] == [693134]
        assert [r.item.tmdb_id for r in result.series] == [136315]
        assert result.movies[0].signals.audience_percent == 90
        assert result.series[0].signals.scraped == 8.1
        assert result.stats.discovered == {"movie": 1, "series": 1}
        assert result.stats.cache_misses > 0
        assert result.stats.duration_seconds >= 0

    @staticmethod
    def test_without_rt(catalog: MagicMock, fa_source: MagicMock, omdb: MagicMock, config: Settings) -> None:
        with (
            patch(f"{ORCHESTRATOR}.TMDBClient"),
            patch(f"{ORCHESTRATOR}.TMDBCatalog", return_value=catalog),
            patch(f"{ORCHESTRATOR}.OMDbClient") as omdb_cls,
            patch(f"{ORCHESTRATOR}.FilmaffinitySource") as fa_cls,
            patch(f"{ORCHESTRATOR}.RTAudienceScraper") as rt_cls,
        ):
            omdb_cls.return_value.__enter__.return_value = omdb
            fa_cls.return_value.__enter__.return_value = fa_source

            result = run_pipeline(PipelineOptions(only=MediaType.MOVIE, use_rt=False, now=NOW), config=config)

        rt_cls.assert_not_called()
        assert result.series == []
        assert result.movies[0].signals.audience_percent is None
