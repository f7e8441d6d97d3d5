"""Centralized configuration for Cartelera.

Configuration strategy (Hybrid approach):
- CRITICAL settings (TMDB and OMDb API keys): Require explicit .env
  configuration. Checked by ``Settings.require_sources()`` at run start.
- INFRASTRUCTURE settings (Logging, matching thresholds, scraping delays):
  Use safe defaults. Override via .env as needed.

All configuration values are sourced from environment variables (.env file).

Usage:
    from cartelera.settings import settings

    # Access sub-settings
    settings.tmdb.api_key
    settings.matching.min_similarity
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cartelera.settings.base import LoggingSettings, MatchingSettings, PathsSettings
from cartelera.settings.sources import (
    FilmaffinitySettings,
    OMDbSettings,
    RTSettings,
    TMDBSettings,
)

__all__ = [
    # Main
    "Settings",
    "settings",
    "ConfigurationError",
    # Base
    "PathsSettings",
    "LoggingSettings",
    "MatchingSettings",
    # Sources
    "TMDBSettings",
    "OMDbSettings",
    "FilmaffinitySettings",
    "RTSettings",
    # Utilities
    "get_masked_settings",
    "sources_status",
]


class ConfigurationError(RuntimeError):
    """Raised when required access configuration is missing."""


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from cartelera.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Paths, logging and matching
    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)

    # Sources
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    omdb: OMDbSettings = Field(default_factory=OMDbSettings)
    filmaffinity: FilmaffinitySettings = Field(default_factory=FilmaffinitySettings)
    rt: RTSettings = Field(default_factory=RTSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower

    def require_sources(self) -> None:
        """Ensure the API keys needed by a run are configured.

        Raises:
            ConfigurationError: If TMDB_API_KEY or OMDB_API_KEY is missing.
        """
        missing = []
        if not self.tmdb.is_configured:
            missing.append("TMDB_API_KEY")
        if not self.omdb.is_configured:
            missing.append("OMDB_API_KEY")
        if missing:
            raise ConfigurationError(f"Missing {', '.join(missing)}. Configure environment or .env file.")


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings(config: Settings | None = None) -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Args:
        config: Settings to dump (defaults to the singleton).

    Returns:
        Configuration dictionary safe for logging.
    """
    data = (config or settings).model_dump(mode="json")
    mask = "***MASKED***"

    # Paths to mask (section, key)
    secrets = [
        ("tmdb", "api_key"),
        ("omdb", "api_key"),
    ]

    for section, key in secrets:
        if section in data and key in data[section] and data[section][key]:
            data[section][key] = mask

    return data


def sources_status(config: Settings | None = None) -> list[tuple[str, bool]]:
    """Return (source name, configured) pairs for every rating source."""
    cfg = config or settings
    return [
        ("TMDB API", cfg.tmdb.is_configured),
        ("OMDb API", cfg.omdb.is_configured),
        ("Filmaffinity", True),
        ("Rotten Tomatoes", cfg.rt.enabled),
    ]
