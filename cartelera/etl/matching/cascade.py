"""Query cascade over the scraped rating source.

Tries alternate search queries for an item, most disambiguating first,
and memoizes every resolution (positive or negative) for the run.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from cartelera.etl.aggregation.schemas import Candidate, Item, MediaType, ResolutionResult
from cartelera.etl.matching.resolver import CandidateResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 8
"""Search hits considered per query."""


class CandidateSource(Protocol):
    """Boundary contract of a searchable rating site."""

    def search_candidates(self, query: str, limit: int = DEFAULT_MAX_CANDIDATES) -> list[Candidate]:
        """Return search hits, [] when the site is unavailable."""
        ...

    def fetch_candidate_detail(self, url: str) -> Candidate | None:
        """Return the film page as a candidate, None when unavailable."""
        ...


# =============================================================================
# PER-RUN CACHE
# =============================================================================


@dataclass
class ResolutionCache:
    """Memoizes resolutions per (query, media type) for one run.

    Created empty when a run starts and dropped when it ends; never
    persisted, since search rankings drift between runs.

    Attributes:
        hits: Lookups served from the cache.
        misses: Lookups that required a search.
    """

    _entries: dict[tuple[str, MediaType], ResolutionResult] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0

    def get(self, query: str, media_type: MediaType) -> ResolutionResult | None:
        """Cached result for a key, counting the lookup."""
        result = self._entries.get((query, media_type))
        if result is None:
            self.misses += 1
        else:
            self.hits += 1
        return result

    def put(self, query: str, media_type: MediaType, result: ResolutionResult) -> None:
        """Store a result, negative ones included."""
        self._entries[(query, media_type)] = result

    def clear(self) -> None:
        """Forget every entry and reset counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: tuple[str, MediaType]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# CASCADE
# =============================================================================


def build_queries(item: Item) -> list[str]:
    """Ordered search queries for an item.

    Order: primary title + year, primary title, original title + year,
    original title. Empty and repeated queries are skipped.

    Args:
        item: Target catalog item.

    Returns:
        Queries to try, most disambiguating first.
    """
    queries: list[str] = []
    for title in (item.title_primary, item.title_original):
        if not title or not title.strip():
            continue
        title = title.strip()
        variants = [f"{title} {item.year}", title] if item.year else [title]
        for query in variants:
            if query not in queries:
                queries.append(query)
    return queries


class QueryCascade:
    """Resolves the scraped rating of items across alternate queries.

    Attributes:
        source: Scraped rating site.
        resolver: Candidate resolver.
        cache: Per-run resolution cache.
        max_candidates: Search hits considered per query.
    """

    def __init__(
        self,
        source: CandidateSource,
        resolver: CandidateResolver | None = None,
        cache: ResolutionCache | None = None,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
    ) -> None:
        self.source = source
        self.resolver = resolver or CandidateResolver()
        self.cache = cache if cache is not None else ResolutionCache()
        self.max_candidates = max_candidates

    def find_rating(self, item: Item) -> ResolutionResult:
        """Resolve the scraped rating of an item.

        Args:
            item: Target catalog item.

        Returns:
            First result carrying a rating or a title, else an empty result.
        """
        for query in build_queries(item):
            result = self.cache.get(query, item.type)
            if result is None:
                result = self._resolve_query(item, query)
                self.cache.put(query, item.type, result)

            if result.found:
                logger.debug(f"'{query}' -> {result.title} ({result.rating})")
                return result

        logger.info(f"No scraped match for {item.label}")
        return ResolutionResult.empty()

    def _resolve_query(self, item: Item, query: str) -> ResolutionResult:
        """Search one query and resolve its hits.

        Args:
            item: Target catalog item.
            query: Search string.

        Returns:
            Resolution result, empty when nothing was accepted.
        """
        candidates = self.source.search_candidates(query, limit=self.max_candidates)
        result = self.resolver.resolve(item, candidates[: self.max_candidates])
        if result is None:
            return ResolutionResult.empty()

        if result.rating is None and result.url:
            return self._complete_from_detail(item, result)
        return result

    def _complete_from_detail(self, item: Item, result: ResolutionResult) -> ResolutionResult:
        """Fill a listing-only hit from its film page.

        Args:
            item: Target catalog item.
            result: Accepted hit without rating.

        Returns:
            Completed result, the hit unchanged when the page is unavailable,
            or an empty result when the page contradicts the item type.
        """
        detail = self.source.fetch_candidate_detail(result.url)
        if detail is None:
            return result

        if detail.type != MediaType.UNKNOWN and item.type != MediaType.UNKNOWN and detail.type != item.type:
            logger.debug(f"Detail page of '{result.title}' is a {detail.type}, expected {item.type}")
            return ResolutionResult.empty()

        matched_type = detail.type if detail.type != MediaType.UNKNOWN else result.matched_type
        return ResolutionResult(
            rating=detail.rating,
            title=result.title or detail.title,
            url=result.url,
            matched_type=matched_type,
        )
