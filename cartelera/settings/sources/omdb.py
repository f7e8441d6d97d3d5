"""OMDb API configuration settings.

Numeric rating source: IMDb rating plus critic percentages.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OMDbSettings(BaseSettings):
    """OMDb API configuration.

    Attributes:
        api_key: OMDb API key (required).
        base_url: OMDb API endpoint.
        timeout: Request timeout (seconds).
    """

    api_key: str = Field(default="", alias="OMDB_API_KEY")
    base_url: str = Field(default="https://www.omdbapi.com/", alias="OMDB_BASE_URL")
    timeout: float = Field(default=20.0, alias="OMDB_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if OMDb API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")
