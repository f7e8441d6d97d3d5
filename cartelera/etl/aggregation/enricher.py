"""Ratings enricher: gathers the six signals of an item.

Resolves the scraped rating through the query cascade, reads the
numeric API and the audience scraper, then scores the item.
"""

import logging
from typing import Protocol

from cartelera.etl.aggregation.coverage import compute_completeness, coverage
from cartelera.etl.aggregation.schemas import EnrichedItem, Item, MediaType, RatingSignals
from cartelera.etl.aggregation.score_calculator import ScoreCalculator
from cartelera.etl.extractors.omdb import OMDbRatings
from cartelera.etl.matching.cascade import QueryCascade

logger = logging.getLogger(__name__)


class NumericRatingSource(Protocol):
    """Boundary contract of the numeric rating API."""

    def get_ratings(self, imdb_id: str | None) -> OMDbRatings:
        """Return every rating known for an IMDb id."""
        ...


class AudienceScoreSource(Protocol):
    """Boundary contract of the audience score lookup."""

    def get_audience_score(self, title: str, year: int | None, media_type: MediaType) -> int | None:
        """Return the audience percentage, None when unknown."""
        ...


class RatingsEnricher:
    """Builds EnrichedItem records from catalog items.

    Attributes:
        cascade: Scraped rating resolution.
        numeric_source: Numeric rating API.
        audience_source: Optional audience score lookup.
        calculator: Composite score calculator.
    """

    def __init__(
        self,
        cascade: QueryCascade,
        numeric_source: NumericRatingSource,
        audience_source: AudienceScoreSource | None = None,
        calculator: ScoreCalculator | None = None,
    ) -> None:
        self.cascade = cascade
        self.numeric_source = numeric_source
        self.audience_source = audience_source
        self.calculator = calculator or ScoreCalculator()

    # =========================================================================
    # Public API
    # =========================================================================

    def enrich(self, item: Item) -> EnrichedItem:
        """Resolve, aggregate and gate a single item.

        Args:
            item: Catalog item.

        Returns:
            EnrichedItem with signals, composite score and coverage.
        """
        resolution = self.cascade.find_rating(item)
        ratings = self.numeric_source.get_ratings(item.imdb_id)

        signals = RatingSignals(
            scraped=resolution.rating,
            numeric_api=ratings.imdb_rating,
            critic_percent=ratings.rotten_tomatoes,
            audience_percent=self._audience_score(item),
            critic_percent2=ratings.metacritic,
            user_score10=item.vote_average,
        )

        composite = self.calculator.aggregate(signals)
        self.calculator.record(signals, composite)

        enriched = EnrichedItem(
            item=item,
            signals=signals,
            composite_score=composite,
            coverage=coverage(signals),
            completeness=compute_completeness(item, signals),
            scraped_title=resolution.title,
            scraped_url=resolution.url,
        )

        logger.info(
            f"Enriched: {item.label} - score={composite if composite is not None else 'N/A'} "
            f"coverage={enriched.coverage}/6"
        )
        return enriched

    def enrich_all(self, items: list[Item]) -> list[EnrichedItem]:
        """Enrich items one after the other.

        Args:
            items: Catalog items.

        Returns:
            Enriched items, in input order.
        """
        self.calculator.reset()
        enriched = [self.enrich(item) for item in items]
        self.calculator.stats.log_summary()
        return enriched

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _audience_score(self, item: Item) -> int | None:
        """Audience percentage from the optional lookup."""
        if self.audience_source is None:
            return None
        title = item.title_original or item.title_primary
        if not title:
            return None
        return self.audience_source.get_audience_score(title, item.year, item.type)
