"""Pydantic schemas for rating aggregation.

Defines the catalog item, scraped candidates, resolution results,
the six-slot rating signal set and the enriched/ranked output records.
"""

from datetime import date
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# CONSTANTS
# =============================================================================

IMDB_ID_PATTERN = r"^tt\d{7,8}$"
"""Regex pattern for IMDB ID validation (format: tt1234567 or tt12345678)."""

SIGNAL_NAMES = (
    "scraped",
    "numeric_api",
    "critic_percent",
    "audience_percent",
    "critic_percent2",
    "user_score10",
)
"""The six rating slots, in aggregation order."""

PERCENT_SIGNALS = frozenset({"critic_percent", "audience_percent", "critic_percent2"})
"""Slots expressed on a 0-100 scale."""


class MediaType(StrEnum):
    """Kind of title. UNKNOWN only appears on scraped candidates."""

    MOVIE = "movie"
    SERIES = "series"
    UNKNOWN = "unknown"


# =============================================================================
# CATALOG & MATCHING
# =============================================================================


class Item(BaseModel):
    """Canonical record to rate, built from the catalog.

    Attributes:
        tmdb_id: TMDB identifier.
        imdb_id: IMDb identifier (format: tt1234567).
        type: MOVIE or SERIES.
        title_primary: Localized title.
        title_original: Original language title.
        year: Release (or first air) year.
        release_date: Local release date, or latest season air date.
        platforms: Streaming providers in the configured region.
        genres: Genre names.
        vote_average: Catalog user score (0-10).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    tmdb_id: int | None = Field(default=None, gt=0)
    imdb_id: str | None = Field(default=None, pattern=IMDB_ID_PATTERN)
    type: MediaType = MediaType.MOVIE
    title_primary: str | None = None
    title_original: str | None = None
    year: int | None = Field(default=None, ge=1870, le=2200)
    release_date: date | None = None
    platforms: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    vote_average: float | None = Field(default=None, ge=0.0, le=10.0)

    @property
    def target_title(self) -> str | None:
        """Title used for matching: primary, else original."""
        return self.title_primary or self.title_original

    @property
    def label(self) -> str:
        """Short human-readable label for logs."""
        return f"{self.target_title or '?'} ({self.year or 'N/A'})"


class Candidate(BaseModel):
    """One scraped search hit that may or may not be the target item.

    Attributes:
        title: Title as shown by the site.
        type: Inferred type, UNKNOWN when the page gives no clue.
        year: Year shown next to the title.
        rating: Site rating (0-10).
        url: Absolute film page URL.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    title: str
    type: MediaType = MediaType.UNKNOWN
    year: int | None = None
    rating: float | None = Field(default=None, ge=0.0, le=10.0)
    url: str | None = None


class ResolutionResult(BaseModel):
    """Outcome of resolving one item against the scraped source."""

    model_config = ConfigDict(frozen=True)

    rating: float | None = None
    title: str | None = None
    url: str | None = None
    matched_type: MediaType | None = None

    @classmethod
    def empty(cls) -> Self:
        """Negative result: nothing acceptable was found."""
        return cls()

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> Self:
        """Build a positive result from an accepted candidate."""
        return cls(
            rating=candidate.rating,
            title=candidate.title,
            url=candidate.url,
            matched_type=candidate.type,
        )

    @property
    def found(self) -> bool:
        """True when a rating or a title was resolved."""
        return self.rating is not None or self.title is not None


# =============================================================================
# SIGNALS & OUTPUT
# =============================================================================


class RatingSignals(BaseModel):
    """Everything known about an item's reception.

    Attributes:
        scraped: Filmaffinity rating (0-10).
        numeric_api: IMDb rating from OMDb (0-10).
        critic_percent: Rotten Tomatoes tomatometer (0-100).
        audience_percent: Rotten Tomatoes audience score (0-100).
        critic_percent2: Metacritic metascore (0-100).
        user_score10: TMDB vote average (0-10).
    """

    model_config = ConfigDict(frozen=True)

    scraped: float | None = Field(default=None, ge=0.0, le=10.0)
    numeric_api: float | None = Field(default=None, ge=0.0, le=10.0)
    critic_percent: float | None = Field(default=None, ge=0.0, le=100.0)
    audience_percent: float | None = Field(default=None, ge=0.0, le=100.0)
    critic_percent2: float | None = Field(default=None, ge=0.0, le=100.0)
    user_score10: float | None = Field(default=None, ge=0.0, le=10.0)

    def as_dict(self) -> dict[str, float | None]:
        """Slots in aggregation order."""
        return {name: getattr(self, name) for name in SIGNAL_NAMES}


class CompletenessReport(BaseModel):
    """Metadata completeness badge for display.

    Attributes:
        status: "ok", "partial" or "low".
        score: Weighted presence score (0-10).
        missing: Labels of absent fields.
    """

    model_config = ConfigDict(frozen=True)

    status: str = "low"
    score: int = 0
    missing: list[str] = Field(default_factory=list)


class EnrichedItem(BaseModel):
    """Item with its signals, composite score and coverage."""

    model_config = ConfigDict(extra="ignore")

    item: Item
    signals: RatingSignals = Field(default_factory=RatingSignals)
    composite_score: float | None = Field(default=None, ge=0.0, le=10.0)
    coverage: int = Field(default=0, ge=0, le=len(SIGNAL_NAMES))
    completeness: CompletenessReport = Field(default_factory=CompletenessReport)
    scraped_title: str | None = None
    scraped_url: str | None = None

    @model_validator(mode="after")
    def check_score_has_coverage(self) -> Self:
        """A composite score needs at least one real signal."""
        if self.composite_score is not None and self.coverage < 1:
            raise ValueError("composite_score requires coverage >= 1")
        return self


class RankedItem(EnrichedItem):
    """Terminal ranked record written to the output."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    rank: int = Field(ge=1)
    score: float = 0.0

    def to_output(self) -> dict:
        """Flat JSON-ready representation."""
        return {
            "rank": self.rank,
            "type": self.item.type.value,
            "title": self.item.title_primary,
            "original_title": self.item.title_original,
            "year": self.item.year,
            "release_date": self.item.release_date.isoformat() if self.item.release_date else None,
            "platforms": list(self.item.platforms),
            "genres": list(self.item.genres),
            "tmdb_id": self.item.tmdb_id,
            "imdb_id": self.item.imdb_id,
            "score": self.score,
            "composite_score": self.composite_score,
            "coverage": self.coverage,
            "signals": self.signals.as_dict(),
            "completeness": self.completeness.model_dump(),
            "scraped_title": self.scraped_title,
            "scraped_url": self.scraped_url,
        }
