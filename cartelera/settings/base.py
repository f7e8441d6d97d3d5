"""Base configuration settings.

Contains foundational settings for paths, logging, and matching.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


# =============================================================================
# PATH SETTINGS
# =============================================================================


class PathsSettings(BaseSettings):
    """Output path and project root.

    Attributes:
        output_file: JSON file receiving the ranked lists.
    """

    output_file: Path = Field(
        default=_PROJECT_ROOT / "data" / "latest.json",
        alias="OUTPUT_FILE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return _PROJECT_ROOT


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory.
        to_file: Also write a dated log file per logger.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper


# =============================================================================
# MATCHING SETTINGS
# =============================================================================


class MatchingSettings(BaseSettings):
    """Entity resolution and ranking configuration.

    Attributes:
        min_similarity: Title similarity floor for accepting a candidate.
        max_candidates: Search results considered per query.
        series_window_days: Recency window applied to series.
        movie_window_days: Optional recency window applied to movies.
        top_n: Items kept per media type.
        movie_discovery_days: Release range used for movie discovery.
        series_discovery_days: Air date range used for series discovery.
        discovery_limit: Catalog items enriched per media type.
    """

    min_similarity: float = Field(default=0.45, ge=0.0, le=1.0, alias="MATCH_MIN_SIMILARITY")
    max_candidates: int = Field(default=8, ge=1, alias="MATCH_MAX_CANDIDATES")
    series_window_days: int = Field(default=14, ge=0, alias="SERIES_WINDOW_DAYS")
    movie_window_days: int | None = Field(default=None, ge=0, alias="MOVIE_WINDOW_DAYS")
    top_n: int = Field(default=5, ge=1, alias="TOP_N")
    movie_discovery_days: int = Field(default=45, ge=1, alias="MOVIE_DISCOVERY_DAYS")
    series_discovery_days: int = Field(default=60, ge=1, alias="SERIES_DISCOVERY_DAYS")
    discovery_limit: int = Field(default=20, ge=1, le=20, alias="DISCOVERY_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
