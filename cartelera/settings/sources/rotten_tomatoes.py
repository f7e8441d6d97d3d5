"""Rotten Tomatoes scraping configuration settings.

Audience score source: scorecard JSON embedded in film pages.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RTSettings(BaseSettings):
    """Rotten Tomatoes scraping configuration.

    Attributes:
        enabled: Look up audience scores at all.
        base_url: RT website base URL.
        min_request_delay: Fixed pause before every request (seconds).
        timeout: Request timeout (seconds).
        user_agent: HTTP User-Agent for requests.
    """

    enabled: bool = Field(default=True, alias="RT_ENABLED")
    base_url: str = Field(
        default="https://www.rottentomatoes.com",
        alias="RT_BASE_URL",
    )
    min_request_delay: float = Field(default=0.3, ge=0.0, alias="RT_MIN_REQUEST_DELAY")
    timeout: float = Field(default=20.0, alias="RT_TIMEOUT")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        alias="RT_USER_AGENT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
