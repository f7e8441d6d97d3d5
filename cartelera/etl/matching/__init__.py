"""Cross-source entity resolution.

Normalizes titles, scores scraped candidates against a catalog item
and drives alternate search queries with a per-run cache.

Example:
    >>> from cartelera.etl.matching import QueryCascade, ResolutionCache
    >>> cascade = QueryCascade(source, cache=ResolutionCache())
    >>> result = cascade.find_rating(item)
"""

from cartelera.etl.matching.cascade import (
    CandidateSource,
    QueryCascade,
    ResolutionCache,
    build_queries,
)
from cartelera.etl.matching.normalizer import NOISE_TOKENS, normalize_title, title_tokens
from cartelera.etl.matching.resolver import DEFAULT_MIN_SIMILARITY, CandidateResolver
from cartelera.etl.matching.similarity import token_similarity

__all__ = [
    "normalize_title",
    "title_tokens",
    "NOISE_TOKENS",
    "token_similarity",
    "CandidateResolver",
    "DEFAULT_MIN_SIMILARITY",
    "QueryCascade",
    "ResolutionCache",
    "CandidateSource",
    "build_queries",
]
