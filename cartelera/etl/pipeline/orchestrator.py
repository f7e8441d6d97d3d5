"""Pipeline orchestration.

Builds the source clients for one run, then discovers, enriches and
ranks movies and series:
    - run_pipeline: Complete run with real clients
    - run_media_type: One media type with given collaborators
"""

from contextlib import ExitStack
from dataclasses import dataclass, field
from datetime import UTC, datetime

from cartelera.etl.aggregation.enricher import RatingsEnricher
from cartelera.etl.aggregation.schemas import MediaType, RankedItem
from cartelera.etl.extractors.filmaffinity import FilmaffinitySource
from cartelera.etl.extractors.omdb import OMDbClient
from cartelera.etl.extractors.rotten_tomatoes import RTAudienceScraper
from cartelera.etl.extractors.tmdb import TMDBCatalog, TMDBClient
from cartelera.etl.matching import CandidateResolver, QueryCascade, ResolutionCache
from cartelera.etl.pipeline.steps import gate_items, step_1_discover, step_2_enrich, step_3_rank
from cartelera.etl.utils import setup_logger
from cartelera.settings import Settings, settings

logger = setup_logger("etl.pipeline.orchestrator")


# =============================================================================
# RUN OPTIONS & RESULT
# =============================================================================


@dataclass
class PipelineOptions:
    """Per-run choices, overriding settings where given.

    Attributes:
        top_n: Items kept per media type.
        only: Restrict the run to one media type.
        platforms: Platform filter (any matches).
        genres: Genre filter (any matches).
        use_rt: Look up Rotten Tomatoes audience scores.
        now: Reference instant for recency windows.
    """

    top_n: int | None = None
    only: MediaType | None = None
    platforms: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    use_rt: bool = True
    now: datetime | None = None

    def __post_init__(self) -> None:
        if self.top_n is not None and self.top_n < 1:
            raise ValueError(f"top_n must be >= 1, got {self.top_n}")

    @property
    def media_types(self) -> list[MediaType]:
        if self.only is not None:
            return [self.only]
        return [MediaType.MOVIE, MediaType.SERIES]


@dataclass
class PipelineStats:
    """Counters of one run."""

    started_at: datetime
    duration_seconds: float = 0.0
    discovered: dict[str, int] = field(default_factory=dict)
    scored: dict[str, int] = field(default_factory=dict)
    ranked: dict[str, int] = field(default_factory=dict)
    cache_hits: int = 0
    cache_misses: int = 0

    def log_summary(self) -> None:
        """Log final run statistics."""
        logger.info("=" * 80)
        logger.info("📊 PIPELINE STATISTICS")
        logger.info("=" * 80)
        for media in self.discovered:
            logger.info(
                f"   {media:<8}: discovered={self.discovered[media]} "
                f"scored={self.scored.get(media, 0)} ranked={self.ranked.get(media, 0)}"
            )
        logger.info("-" * 40)
        logger.info(f"🗂️ Resolution cache: {self.cache_hits} hits / {self.cache_misses} misses")
        logger.info(f"⏱️ Total duration: {self.duration_seconds:.2f}s")
        logger.info("=" * 80)


@dataclass
class PipelineResult:
    """Ranked lists of one run."""

    movies: list[RankedItem] = field(default_factory=list)
    series: list[RankedItem] = field(default_factory=list)
    stats: PipelineStats = field(default_factory=lambda: PipelineStats(started_at=datetime.now(UTC)))

    def ranked_for(self, media_type: MediaType) -> list[RankedItem]:
        return self.movies if media_type == MediaType.MOVIE else self.series


# =============================================================================
# MEDIA TYPE EXECUTION
# =============================================================================


def run_media_type(
    media_type: MediaType,
    catalog: TMDBCatalog,
    enricher: RatingsEnricher,
    options: PipelineOptions,
    config: Settings,
    stats: PipelineStats,
) -> list[RankedItem]:
    """Discover, enrich and rank one media type.

    Args:
        media_type: MOVIE or SERIES.
        catalog: TMDB catalog.
        enricher: Ratings enricher.
        options: Run options.
        config: Settings for windows and limits.
        stats: Run counters, updated in place.

    Returns:
        Ranked items of the media type.
    """
    matching = config.matching
    if media_type == MediaType.MOVIE:
        discovery_days, window_days = matching.movie_discovery_days, matching.movie_window_days
    else:
        discovery_days, window_days = matching.series_discovery_days, matching.series_window_days

    top_n = options.top_n if options.top_n is not None else matching.top_n

    items = step_1_discover(catalog, media_type, days=discovery_days, limit=matching.discovery_limit)
    gated = gate_items(items, window_days=window_days, now=options.now)
    enriched = step_2_enrich(enricher, gated)
    ranked = step_3_rank(
        enriched,
        top_n=top_n,
        window_days=window_days,
        platforms=options.platforms,
        genres=options.genres,
        now=options.now,
    )

    stats.discovered[media_type.value] = len(items)
    stats.scored[media_type.value] = sum(1 for e in enriched if e.composite_score is not None)
    stats.ranked[media_type.value] = len(ranked)
    return ranked


# =============================================================================
# MAIN PIPELINE EXECUTION
# =============================================================================


def run_pipeline(
    options: PipelineOptions | None = None,
    config: Settings | None = None,
) -> PipelineResult:
    """Execute a complete run.

    Args:
        options: Run options.
        config: Settings, global settings when omitted.

    Returns:
        PipelineResult with ranked movies and series.

    Raises:
        ConfigurationError: If a required API key is missing.
    """
    options = options or PipelineOptions()
    config = config or settings
    config.require_sources()

    stats = PipelineStats(started_at=datetime.now(UTC))
    result = PipelineResult(stats=stats)

    logger.info("🚀 STARTING RATINGS PIPELINE")
    logger.info(f"Media types : {', '.join(m.value for m in options.media_types)}")
    if options.platforms or options.genres:
        logger.info(f"Filters     : platforms={options.platforms or 'all'} genres={options.genres or 'all'}")

    # One cache per run, dropped with the cascade
    cache = ResolutionCache()

    with ExitStack() as stack:
        tmdb = stack.enter_context(TMDBClient(config.tmdb))
        omdb = stack.enter_context(OMDbClient(config.omdb))
        filmaffinity = stack.enter_context(FilmaffinitySource(config.filmaffinity))
        rt = None
        if options.use_rt and config.rt.enabled:
            rt = stack.enter_context(RTAudienceScraper(config.rt))

        catalog = TMDBCatalog(tmdb)
        cascade = QueryCascade(
            filmaffinity,
            resolver=CandidateResolver(config.matching.min_similarity),
            cache=cache,
            max_candidates=config.matching.max_candidates,
        )
        enricher = RatingsEnricher(cascade, numeric_source=omdb, audience_source=rt)

        for media_type in options.media_types:
            ranked = run_media_type(media_type, catalog, enricher, options, config, stats)
            if media_type == MediaType.MOVIE:
                result.movies = ranked
            else:
                result.series = ranked

    stats.cache_hits, stats.cache_misses = cache.hits, cache.misses
    stats.duration_seconds = (datetime.now(UTC) - stats.started_at).total_seconds()
    stats.log_summary()
    return result
