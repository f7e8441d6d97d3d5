"""Title normalization for cross-source comparison.

Canonicalizes free-text titles so that the same film written by
different sites (accents, punctuation, "Serie de TV" suffixes...)
compares equal.
"""

import re

from unidecode import unidecode

# =============================================================================
# CONSTANTS
# =============================================================================

NOISE_TOKENS = (
    "serie de animacion",
    "serie animacion",
    "animated series",
    "miniserie de tv",
    "tv mini series",
    "mini serie",
    "mini series",
    "miniserie",
    "miniseries",
    "serie de television",
    "serie de tv",
    "tv series",
    "temporada",
    "season",
    "documental",
    "documentary",
)
"""Suffixes third-party pages append to titles, removed as whole words."""

_QUOTES_PATTERN = re.compile(r"['’‘´`\"“”]")
_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_NOISE_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(t) for t in sorted(NOISE_TOKENS, key=len, reverse=True)) + r")\b"
)


def _collapse(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_title(text: str | None) -> str:
    """Canonicalize a title for comparison.

    Steps: strip diacritics, lowercase, "&" to "and", drop quote marks,
    other punctuation to spaces, collapse whitespace, then remove
    NOISE_TOKENS until none is left.

    Args:
        text: Raw title (None is treated as empty).

    Returns:
        Normalized title, possibly empty.
    """
    if not text:
        return ""

    cleaned = unidecode(str(text)).lower()
    cleaned = cleaned.replace("&", " and ")
    cleaned = _QUOTES_PATTERN.sub("", cleaned)
    cleaned = _NON_ALNUM_PATTERN.sub(" ", cleaned)
    cleaned = _collapse(cleaned)

    # Removing one token can join two words into another noise token
    while True:
        stripped = _collapse(_NOISE_PATTERN.sub(" ", cleaned))
        if stripped == cleaned:
            return stripped
        cleaned = stripped


def title_tokens(text: str | None) -> set[str]:
    """Set of whitespace tokens of the normalized title."""
    normalized = normalize_title(text)
    return set(normalized.split()) if normalized else set()
