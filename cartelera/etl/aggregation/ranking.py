"""Top-N selection and dense rank assignment."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from cartelera.etl.aggregation.coverage import admissible
from cartelera.etl.aggregation.rules import in_window
from cartelera.etl.aggregation.schemas import EnrichedItem, RankedItem

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5

RANKING_FALLBACKS: tuple[tuple[str, Callable[[EnrichedItem], float | None]], ...] = (
    ("composite_score", lambda e: e.composite_score),
    ("numeric_api", lambda e: e.signals.numeric_api),
    ("scraped", lambda e: e.signals.scraped),
)
"""Ranking value sources, evaluated top to bottom; 0.0 when all are absent."""


def ranking_value(enriched: EnrichedItem) -> float:
    """Value used to order an item: first non-null fallback, else 0.0."""
    for _name, getter in RANKING_FALLBACKS:
        value = getter(enriched)
        if value is not None:
            return value
    return 0.0


def select_top(
    items: Iterable[EnrichedItem],
    n: int = DEFAULT_TOP_N,
    window_days: int | None = None,
    now: datetime | str | None = None,
) -> list[RankedItem]:
    """Admit, rank and truncate enriched items.

    Args:
        items: Enriched items of one media type.
        n: Number of items to keep.
        window_days: Recency window on the release date, None to skip.
        now: Reference instant for the window.

    Returns:
        Up to n ranked items, rank 1 first. Ties keep input order.
    """
    admitted: list[EnrichedItem] = []
    for enriched in items:
        if not admissible(enriched):
            logger.debug(f"Dropped {enriched.item.label}: no rating signal")
            continue
        if window_days is not None and not in_window(enriched.item.release_date, window_days, now):
            logger.debug(f"Dropped {enriched.item.label}: outside {window_days}-day window")
            continue
        admitted.append(enriched)

    ordered = sorted(admitted, key=ranking_value, reverse=True)

    return [
        RankedItem(**enriched.model_dump(), rank=index + 1, score=ranking_value(enriched))
        for index, enriched in enumerate(ordered[: max(n, 0)])
    ]
