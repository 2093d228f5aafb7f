"""
Application configuration with environment variable support.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Upstream news API
    NEWS_API_KEY: str = ""
    NEWS_API_URL: str = "https://newsapi.org/v2"
    NEWS_COUNTRY: str = "in"
    NEWS_FALLBACK_COUNTRY: str = "us"
    NEWS_REGION_QUERY: str = "India"
    NEWS_PAGE_SIZE: int = 20
    NEWS_MAX_ARTICLES: int = 15
    NEWS_HTTP_TIMEOUT_SECONDS: float = 10.0

    # Aggregate cache
    NEWS_CACHE_TTL_SECONDS: int = 30 * 60

    # Location
    DEFAULT_LOCATION_LABEL: str = "India"
    DEVICE_LATITUDE: Optional[float] = None
    DEVICE_LONGITUDE: Optional[float] = None
    DEVICE_ACCURACY_METERS: float = 10.0
    DEVICE_PLACE_NAME: Optional[str] = None

    # HTTP surface
    CORS_ALLOW_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("CORS_ALLOW_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        """Accept a comma-separated env value as well as a list."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


settings = Settings()


# Location fix acquisition (seconds)
LOCATION_TIMEOUT_SECONDS: float = 15.0
LOCATION_MAXIMUM_AGE_SECONDS: float = 10.0

# Reading speed used for read-time estimates
WORDS_PER_MINUTE: int = 200

# Broad civic query used by the first fallback tier
CIVIC_QUERY_TERMS: List[str] = [
    "infrastructure",
    "hospital",
    "school",
    "road",
    "public",
    "government",
    "municipal",
    "civic",
    "health",
    "education",
    "transport",
]

# Service area bounding box (India), inclusive
SERVICE_AREA_BOUNDS: Dict[str, float] = {
    "north": 37.6,
    "south": 6.4,
    "east": 97.25,
    "west": 68.1,
}
