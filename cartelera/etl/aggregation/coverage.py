"""Signal coverage gate and metadata completeness badge."""

from cartelera.etl.aggregation.schemas import (
    SIGNAL_NAMES,
    CompletenessReport,
    EnrichedItem,
    Item,
    RatingSignals,
)

# =============================================================================
# CONSTANTS
# =============================================================================

MAX_COVERAGE = len(SIGNAL_NAMES)
"""Number of rating slots."""

COMPLETENESS_WEIGHTS = {
    "Fecha estreno ES": 3,
    "Plataforma": 2,
    "Género": 1,
    "IMDb": 2,
    "Filmaffinity": 2,
}
"""Weight of each metadata field in the completeness score (total 10)."""

COMPLETENESS_OK = 9
COMPLETENESS_PARTIAL = 6

_BADGES = {
    "ok": "✅ Completo",
    "partial": "⚠️ Parcial",
    "low": "❌ Baja",
}


# =============================================================================
# COVERAGE GATE
# =============================================================================


def coverage(signals: RatingSignals) -> int:
    """Count the signals present (0..6)."""
    return sum(1 for value in signals.as_dict().values() if value is not None)


def admissible(enriched: EnrichedItem) -> bool:
    """True iff at least one real signal backs the item."""
    return coverage(enriched.signals) > 0


# =============================================================================
# COMPLETENESS
# =============================================================================


def compute_completeness(item: Item, signals: RatingSignals) -> CompletenessReport:
    """Weigh which display metadata is known for an item.

    Args:
        item: Catalog item.
        signals: Item signals.

    Returns:
        CompletenessReport with status "ok" (>= 9), "partial" (>= 6) or "low".
    """
    present = {
        "Fecha estreno ES": item.release_date is not None,
        "Plataforma": bool(item.platforms),
        "Género": bool(item.genres),
        "IMDb": signals.numeric_api is not None,
        "Filmaffinity": signals.scraped is not None,
    }

    score = sum(COMPLETENESS_WEIGHTS[label] for label, ok in present.items() if ok)
    missing = [label for label, ok in present.items() if not ok]

    if score >= COMPLETENESS_OK:
        status = "ok"
    elif score >= COMPLETENESS_PARTIAL:
        status = "partial"
    else:
        status = "low"

    return CompletenessReport(status=status, score=score, missing=missing)


def badge_text(status: str) -> str:
    """Short text for a completeness badge."""
    return _BADGES.get(status, _BADGES["low"])
