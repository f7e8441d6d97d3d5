"""Filmaffinity scraping configuration settings.

Scraped source: search and film pages, no public API.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FilmaffinitySettings(BaseSettings):
    """Filmaffinity scraping configuration.

    Attributes:
        base_url: Site base URL.
        locale: Locale path segment ("es", "us"...).
        min_request_delay: Fixed pause before every request (seconds).
        timeout: Request timeout (seconds).
        user_agent: HTTP User-Agent for requests.
    """

    base_url: str = Field(default="https://www.filmaffinity.com", alias="FA_BASE_URL")
    locale: str = Field(default="es", alias="FA_LOCALE")
    min_request_delay: float = Field(default=0.3, ge=0.0, alias="FA_MIN_REQUEST_DELAY")
    timeout: float = Field(default=20.0, alias="FA_TIMEOUT")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        alias="FA_USER_AGENT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def search_url(self) -> str:
        """Search endpoint for the configured locale."""
        return f"{self.base_url}/{self.locale}/search.php"
