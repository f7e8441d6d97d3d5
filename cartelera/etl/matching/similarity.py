"""Token-set similarity between titles."""

from cartelera.etl.matching.normalizer import title_tokens


def token_similarity(a: str | None, b: str | None) -> float:
    """Jaccard index of the normalized token sets of two titles.

    Args:
        a: First title.
        b: Second title.

    Returns:
        Similarity in [0, 1], 0.0 when either title has no tokens.
    """
    tokens_a = title_tokens(a)
    tokens_b = title_tokens(b)
    if not tokens_a or not tokens_b:
        return 0.0

    intersection = len(tokens_a & tokens_b)
    union = len(tokens_a | tokens_b)
    return intersection / union
