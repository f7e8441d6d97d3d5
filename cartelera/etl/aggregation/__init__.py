"""Aggregation module for multi-source rating fusion.

This module turns catalog items into ranked lists: it gathers the
rating signals of each item, computes a coverage-renormalized composite
score, gates items without any signal and keeps the top N.

Example:
    >>> from cartelera.etl.aggregation import select_top
    >>> enriched = enricher.enrich_all(items)
    >>> top = select_top(enriched, n=5, window_days=14)
"""

from cartelera.etl.aggregation.coverage import (
    admissible,
    badge_text,
    compute_completeness,
    coverage,
)
from cartelera.etl.aggregation.ranking import RANKING_FALLBACKS, ranking_value, select_top
from cartelera.etl.aggregation.rules import in_window, parse_iso_date, passes_filters
from cartelera.etl.aggregation.schemas import (
    IMDB_ID_PATTERN,
    SIGNAL_NAMES,
    Candidate,
    CompletenessReport,
    EnrichedItem,
    Item,
    MediaType,
    RankedItem,
    RatingSignals,
    ResolutionResult,
)
from cartelera.etl.aggregation.score_calculator import DEFAULT_WEIGHTS, ScoreCalculator, ScoreStats

__all__ = [
    # Scoring
    "ScoreCalculator",
    "ScoreStats",
    "DEFAULT_WEIGHTS",
    # Gates
    "coverage",
    "admissible",
    "compute_completeness",
    "badge_text",
    "in_window",
    "parse_iso_date",
    "passes_filters",
    # Ranking
    "select_top",
    "ranking_value",
    "RANKING_FALLBACKS",
    # Schemas
    "Item",
    "Candidate",
    "MediaType",
    "ResolutionResult",
    "RatingSignals",
    "EnrichedItem",
    "RankedItem",
    "CompletenessReport",
    "SIGNAL_NAMES",
    "IMDB_ID_PATTERN",
]
