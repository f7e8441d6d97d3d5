"""Candidate resolver for scraped search results.

Picks the search hit that most likely is the target item, or nothing
when no hit clears the title similarity floor.

Rules:
    1. Hard reject (candidate never scored): known type mismatch, or
       both years known and more than YEAR_TOLERANCE apart.
    2. Score: 100 * title similarity plus additive bonuses for an
       exact normalized title, year proximity, rating and URL presence.
    3. The best candidate is accepted only if its own title similarity
       reaches min_similarity.
"""

import logging

from cartelera.etl.aggregation.schemas import Candidate, Item, MediaType, ResolutionResult
from cartelera.etl.matching.normalizer import normalize_title
from cartelera.etl.matching.similarity import token_similarity

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_MIN_SIMILARITY = 0.45
"""Absolute title similarity floor for the winning candidate."""

YEAR_TOLERANCE = 1
"""Maximum year difference before a candidate is rejected."""

SIMILARITY_WEIGHT = 100.0
EXACT_TITLE_BONUS = 25.0
SAME_YEAR_BONUS = 18.0
ADJACENT_YEAR_BONUS = 10.0
RATING_BONUS = 3.0
URL_BONUS = 2.0


class CandidateResolver:
    """Ranks scraped candidates for one item.

    Attributes:
        min_similarity: Title similarity floor for acceptance.
    """

    def __init__(self, min_similarity: float = DEFAULT_MIN_SIMILARITY) -> None:
        if not 0.0 <= min_similarity <= 1.0:
            raise ValueError("min_similarity must be within [0, 1]")
        self.min_similarity = min_similarity

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def resolve(
        self,
        item: Item,
        candidates: list[Candidate],
        min_similarity: float | None = None,
    ) -> ResolutionResult | None:
        """Resolve an item against the hits of one query.

        Args:
            item: Target catalog item.
            candidates: Search hits for one query.
            min_similarity: Similarity floor for this call, the
                resolver floor when omitted.

        Returns:
            ResolutionResult of the accepted candidate, or None.
        """
        best = self.pick_best(item, candidates, min_similarity)
        return ResolutionResult.from_candidate(best) if best else None

    def pick_best(
        self,
        item: Item,
        candidates: list[Candidate],
        min_similarity: float | None = None,
    ) -> Candidate | None:
        """Return the accepted candidate for an item, if any.

        Args:
            item: Target catalog item.
            candidates: Search hits for one query.
            min_similarity: Similarity floor for this call.

        Returns:
            Best surviving candidate, or None when every candidate is
            rejected or the best one falls under the similarity floor.
        """
        floor = self.min_similarity if min_similarity is None else min_similarity
        if not 0.0 <= floor <= 1.0:
            raise ValueError("min_similarity must be within [0, 1]")

        target = item.target_title
        if not target:
            return None

        survivors = [c for c in candidates if not self.is_hard_rejected(item, c)]
        if not survivors:
            logger.debug(f"All {len(candidates)} candidates rejected for {item.label}")
            return None

        best = max(survivors, key=lambda c: self.score_candidate(item, c))
        similarity = token_similarity(target, best.title)

        if similarity < floor:
            logger.debug(
                f"Best candidate '{best.title}' for {item.label} below floor "
                f"({similarity:.2f} < {floor:.2f})"
            )
            return None

        logger.debug(f"Accepted '{best.title}' ({best.year}) for {item.label} (sim={similarity:.2f})")
        return best

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    @staticmethod
    def is_hard_rejected(item: Item, candidate: Candidate) -> bool:
        """Check the rules that exclude a candidate regardless of score.

        UNKNOWN types never trigger a rejection: only a known mismatch does.

        Args:
            item: Target catalog item.
            candidate: Search hit.

        Returns:
            True if the candidate must not be considered.
        """
        item_type = item.type
        cand_type = candidate.type
        if item_type != MediaType.UNKNOWN and cand_type != MediaType.UNKNOWN and item_type != cand_type:
            return True

        if item.year is not None and candidate.year is not None:
            if abs(item.year - candidate.year) > YEAR_TOLERANCE:
                return True

        return False

    @staticmethod
    def score_candidate(item: Item, candidate: Candidate) -> float:
        """Weighted score of a surviving candidate.

        Args:
            item: Target catalog item.
            candidate: Search hit.

        Returns:
            Additive score (higher is better).
        """
        target = item.target_title
        score = SIMILARITY_WEIGHT * token_similarity(target, candidate.title)

        if normalize_title(target) == normalize_title(candidate.title):
            score += EXACT_TITLE_BONUS

        if item.year is not None and candidate.year is not None:
            diff = abs(item.year - candidate.year)
            if diff == 0:
                score += SAME_YEAR_BONUS
            elif diff == 1:
                score += ADJACENT_YEAR_BONUS

        if candidate.rating is not None:
            score += RATING_BONUS
        if candidate.url:
            score += URL_BONUS

        return score
