"""Composite score calculator for rated items.

Computes a weighted score from up to six rating signals:
Filmaffinity (25%), IMDb (25%), RT critics (12.5%), RT audience (12.5%),
Metacritic (12.5%), TMDB users (12.5%).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from cartelera.etl.aggregation.schemas import PERCENT_SIGNALS, SIGNAL_NAMES, RatingSignals

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS - SCORE WEIGHTS
# =============================================================================

WEIGHT_SCRAPED = 0.25
"""Filmaffinity rating weight (25%)."""

WEIGHT_NUMERIC_API = 0.25
"""IMDb rating weight (25%)."""

WEIGHT_CRITIC_PERCENT = 0.125
"""Rotten Tomatoes tomatometer weight (12.5%)."""

WEIGHT_AUDIENCE_PERCENT = 0.125
"""Rotten Tomatoes audience score weight (12.5%)."""

WEIGHT_CRITIC_PERCENT2 = 0.125
"""Metacritic metascore weight (12.5%)."""

WEIGHT_USER_SCORE10 = 0.125
"""TMDB vote average weight (12.5%)."""

DEFAULT_WEIGHTS: dict[str, float] = {
    "scraped": WEIGHT_SCRAPED,
    "numeric_api": WEIGHT_NUMERIC_API,
    "critic_percent": WEIGHT_CRITIC_PERCENT,
    "audience_percent": WEIGHT_AUDIENCE_PERCENT,
    "critic_percent2": WEIGHT_CRITIC_PERCENT2,
    "user_score10": WEIGHT_USER_SCORE10,
}

PERCENT_SCALE_FACTOR = 10.0
"""Factor to convert a 0-100 score to the 0-10 scale."""

MIN_SCORE = 0.0
"""Minimum valid score."""

MAX_SCORE = 10.0
"""Maximum valid score."""


# =============================================================================
# SCORE STATISTICS
# =============================================================================


@dataclass
class ScoreStats:
    """Statistics for score calculation.

    Attributes:
        total_items: Items processed.
        scored_items: Items that received a composite score.
        with_signal: Items having each signal, keyed by slot name.
        score_sum: Sum of composite scores.
    """

    total_items: int = 0
    scored_items: int = 0
    with_signal: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SIGNAL_NAMES, 0))
    score_sum: float = 0.0

    @property
    def avg_score(self) -> float:
        """Calculate average composite score over scored items."""
        if self.scored_items == 0:
            return 0.0
        return round(self.score_sum / self.scored_items, 2)

    def log_summary(self) -> None:
        """Log score calculation statistics."""
        per_source = ", ".join(f"{name}={count}" for name, count in self.with_signal.items())
        logger.info(
            "Score calculation: %d items, %d scored, avg=%.2f (%s)",
            self.total_items,
            self.scored_items,
            self.avg_score,
            per_source,
        )


# =============================================================================
# SCORE COMPONENTS
# =============================================================================


@dataclass
class ScoreComponent:
    """Single score component with weight.

    Attributes:
        value: Normalized score (0-10).
        weight: Weight for aggregation.
    """

    value: float
    weight: float

    @property
    def weighted_value(self) -> float:
        """Calculate weighted contribution."""
        return self.value * self.weight


def to_ten_scale(name: str, value: float | None) -> float | None:
    """Map a signal value to the 0-10 scale.

    Args:
        name: Signal slot name.
        value: Raw value.

    Returns:
        Value on the 0-10 scale, None when absent.
    """
    if value is None:
        return None
    if name in PERCENT_SIGNALS:
        return value / PERCENT_SCALE_FACTOR
    return float(value)


# =============================================================================
# SCORE CALCULATOR
# =============================================================================


class ScoreCalculator:
    """Calculates coverage-renormalized composite scores.

    Missing signals do not drag the score down: the weights of the
    present signals are rescaled to sum to one, so a two-signal item
    stays comparable to a six-signal one.

    Attributes:
        weights: Weight per signal slot.
        stats: Calculation statistics.
    """

    def __init__(self, weights: Mapping[str, float] | None = None) -> None:
        """Initialize calculator.

        Args:
            weights: Weight per slot name, DEFAULT_WEIGHTS when omitted.
        """
        self.weights = dict(weights or DEFAULT_WEIGHTS)
        if any(w < 0 for w in self.weights.values()):
            raise ValueError("weights must be non-negative")
        self.stats = ScoreStats(with_signal=dict.fromkeys(self.weights, 0))

    # =========================================================================
    # Public API
    # =========================================================================

    def aggregate(self, signals: RatingSignals | Mapping[str, float | None]) -> float | None:
        """Combine the available signals into one 0-10 score.

        Args:
            signals: Signal set, or a mapping of slot name to value.

        Returns:
            Renormalized weighted mean rounded to 2 decimals,
            None when no signal is present.
        """
        components = self._collect_components(signals)
        if not components:
            return None
        return self._compute_weighted_average(components)

    def record(self, signals: RatingSignals, score: float | None) -> None:
        """Update statistics after scoring an item.

        Args:
            signals: Item signals.
            score: Calculated composite score.
        """
        self.stats.total_items += 1
        values = signals.as_dict()
        for name in self.stats.with_signal:
            if values.get(name) is not None:
                self.stats.with_signal[name] += 1
        if score is not None:
            self.stats.scored_items += 1
            self.stats.score_sum += score

    def reset(self) -> None:
        """Reset statistics for a new batch."""
        self.stats = ScoreStats(with_signal=dict.fromkeys(self.weights, 0))

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _collect_components(
        self,
        signals: RatingSignals | Mapping[str, float | None],
    ) -> list[ScoreComponent]:
        """Collect all available score components.

        Args:
            signals: Signal set or mapping.

        Returns:
            Components of present signals with a positive weight.
        """
        values = signals.as_dict() if isinstance(signals, RatingSignals) else dict(signals)

        components: list[ScoreComponent] = []
        for name, weight in self.weights.items():
            value = to_ten_scale(name, values.get(name))
            if value is None or weight <= 0:
                continue
            components.append(ScoreComponent(value=value, weight=weight))
        return components

    @staticmethod
    def _compute_weighted_average(components: list[ScoreComponent]) -> float:
        """Compute normalized weighted average.

        Args:
            components: Available score components.

        Returns:
            Weighted average normalized to available weights.
        """
        total_weight = sum(c.weight for c in components)
        weighted_sum = sum(c.weighted_value for c in components)
        score = weighted_sum / total_weight

        return round(min(max(score, MIN_SCORE), MAX_SCORE), 2)
