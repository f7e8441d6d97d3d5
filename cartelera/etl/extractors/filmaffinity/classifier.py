"""Best-effort type and year inference for Filmaffinity pages.

Filmaffinity exposes no structured type field: series are only told
apart by free-text markers such as "(Serie de TV)". Inference is a
heuristic. When no marker is found the type stays UNKNOWN, which the
resolver never treats as a mismatch.
"""

import re

from unidecode import unidecode

from cartelera.etl.aggregation.schemas import MediaType

# =============================================================================
# CONSTANTS
# =============================================================================

SERIES_MARKERS = (
    "serie de tv",
    "serie de television",
    "serie de animacion",
    "miniserie de tv",
    "miniserie",
    "tv series",
    "tv mini series",
    "miniseries",
    "webserie",
)

MOVIE_MARKERS = (
    "pelicula",
    "cortometraje",
    "telefilm",
    "tv movie",
)

_YEAR_PATTERN = re.compile(r"\b(18[89]\d|19\d{2}|20\d{2}|21\d{2})\b")
_RATING_PATTERN = re.compile(r"(\d{1,2})(?:[.,](\d))?")
_TYPE_SUFFIX_PATTERN = re.compile(r"\s*\((?:(?:mini)?serie[^()]*|tv|c)\)\s*$", re.IGNORECASE)


def _fold(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", " ", unidecode(text).lower()).strip()


def _has_marker(folded: str, markers: tuple[str, ...]) -> bool:
    return any(re.search(rf"\b{re.escape(marker)}\b", folded) for marker in markers)


# =============================================================================
# INFERENCE
# =============================================================================


def infer_media_type(*texts: str | None) -> MediaType:
    """Infer MOVIE/SERIES from page snippets.

    Series markers win over movie markers.

    Args:
        *texts: Title, genre line or any other snippet of the page.

    Returns:
        SERIES or MOVIE when a marker is found, UNKNOWN otherwise.
    """
    folded = " ".join(_fold(t) for t in texts if t)
    if not folded:
        return MediaType.UNKNOWN
    if _has_marker(folded, SERIES_MARKERS):
        return MediaType.SERIES
    if _has_marker(folded, MOVIE_MARKERS):
        return MediaType.MOVIE
    return MediaType.UNKNOWN


def extract_year(text: str | None) -> int | None:
    """First plausible year in a text ("2024", "(2023)", "2019-2021")."""
    if not text:
        return None
    match = _YEAR_PATTERN.search(text)
    return int(match.group(1)) if match else None


def parse_rating(text: str | None) -> float | None:
    """Parse a displayed rating ("7,8", "6.5", "--") into 0-10.

    Returns:
        The rating, or None when missing or out of range.
    """
    if not text:
        return None
    match = _RATING_PATTERN.search(text.strip())
    if not match:
        return None
    whole, decimal = match.groups()
    rating = float(f"{whole}.{decimal or 0}")
    return rating if 0.0 <= rating <= 10.0 else None


def clean_title(title: str) -> str:
    """Drop a trailing type marker such as "(Serie de TV)" or "(C)"."""
    return _TYPE_SUFFIX_PATTERN.sub("", title).strip()
