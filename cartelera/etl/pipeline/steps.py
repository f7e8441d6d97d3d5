"""Rating pipeline steps (1-3).

Each step handles one stage for one media type:
    - Step 1: Catalog discovery (TMDB)
    - Step 2: Rating enrichment (Filmaffinity, OMDb, Rotten Tomatoes)
    - Step 3: Filtering, ranking and Top-N selection
"""

from collections.abc import Iterable
from datetime import datetime

from cartelera.etl.aggregation.enricher import RatingsEnricher
from cartelera.etl.aggregation.ranking import select_top
from cartelera.etl.aggregation.rules import in_window, passes_filters
from cartelera.etl.aggregation.schemas import EnrichedItem, Item, MediaType, RankedItem
from cartelera.etl.extractors.tmdb import TMDBCatalog
from cartelera.etl.utils import setup_logger

logger = setup_logger("etl.pipeline.steps")


# =============================================================================
# STEP 1: DISCOVERY (TMDB)
# =============================================================================


def step_1_discover(
    catalog: TMDBCatalog,
    media_type: MediaType,
    days: int,
    limit: int,
) -> list[Item]:
    """Discover recent titles and load their details.

    A title whose details fail keeps its discovery summary.

    Args:
        catalog: TMDB catalog.
        media_type: MOVIE or SERIES.
        days: Discovery window.
        limit: Maximum number of titles.

    Returns:
        Detailed Items, in popularity order.
    """
    logger.info("=" * 80)
    logger.info(f"🎬 STEP 1/3: DISCOVERY {media_type.upper()} (TMDB, last {days} days)")
    logger.info("=" * 80)

    summaries = catalog.discover(media_type, days=days, limit=limit)
    items = [catalog.complete(summary) for summary in summaries]

    logger.info(f"✅ Step 1 done: {len(items)} {media_type} items")
    return items


def gate_items(
    items: Iterable[Item],
    window_days: int | None = None,
    now: datetime | str | None = None,
) -> list[Item]:
    """Keep items worth looking up on the rating sources.

    An item passes when it has a title to query and, if ``window_days``
    is given, a release date inside the window.

    Args:
        items: Discovered items.
        window_days: Recency window, None to skip.
        now: Reference instant for the window.

    Returns:
        Gated items, in input order.
    """
    kept: list[Item] = []
    for item in items:
        if not (item.target_title or "").strip():
            logger.debug(f"Skipped tmdb_id={item.tmdb_id}: no title to query")
            continue
        if window_days is not None and not in_window(item.release_date, window_days, now):
            logger.debug(f"Skipped {item.label}: outside the {window_days}-day window")
            continue
        kept.append(item)
    return kept


# =============================================================================
# STEP 2: ENRICHMENT (RATING SOURCES)
# =============================================================================


def step_2_enrich(enricher: RatingsEnricher, items: list[Item]) -> list[EnrichedItem]:
    """Gather rating signals and compute composite scores.

    Args:
        enricher: Ratings enricher.
        items: Catalog items.

    Returns:
        Enriched items, in input order.
    """
    logger.info("=" * 80)
    logger.info(f"⭐ STEP 2/3: ENRICHMENT ({len(items)} items)")
    logger.info("=" * 80)

    enriched = enricher.enrich_all(items)
    scored = sum(1 for e in enriched if e.composite_score is not None)

    logger.info(f"✅ Step 2 done: {scored}/{len(enriched)} scored")
    return enriched


# =============================================================================
# STEP 3: RANKING
# =============================================================================


def step_3_rank(
    enriched: Iterable[EnrichedItem],
    top_n: int,
    window_days: int | None = None,
    platforms: Iterable[str] | None = None,
    genres: Iterable[str] | None = None,
    now: datetime | str | None = None,
) -> list[RankedItem]:
    """Filter and rank enriched items.

    Args:
        enriched: Enriched items of one media type.
        top_n: Items to keep.
        window_days: Recency window, None to skip.
        platforms: Selected platforms (any matches), None for all.
        genres: Selected genres (any matches), None for all.
        now: Reference instant for the window.

    Returns:
        Ranked items, rank 1 first.
    """
    logger.info("=" * 80)
    logger.info(f"🏆 STEP 3/3: RANKING (top {top_n})")
    logger.info("=" * 80)

    platforms = list(platforms or [])
    genres = list(genres or [])
    selected = [e for e in enriched if passes_filters(e.item, platforms, genres)]
    ranked = select_top(selected, n=top_n, window_days=window_days, now=now)

    for entry in ranked:
        logger.info(f"   #{entry.rank} {entry.item.label} - {entry.score:.2f} ({entry.coverage}/6)")
    logger.info(f"✅ Step 3 done: {len(ranked)} ranked")
    return ranked
