"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings, read once from the environment / .env file."""

    # Database
    database_url: str = Field("sqlite+aiosqlite:///./foodietrust.db")

    # AI providers (tried in this order: GoogleAI, Groq, OpenRouter)
    googleai_key: Optional[str] = Field(None)
    groq_key: Optional[str] = Field(None)
    openrouter_key: Optional[str] = Field(None)

    googleai_model: str = Field("gemini-1.5-flash")
    groq_model: str = Field("llama-3.1-70b-versatile")
    openrouter_model: str = Field("meta-llama/llama-3.1-70b-instruct")

    provider_timeout_seconds: float = Field(8.0)

    # Response cache
    cache_max_entries: int = Field(100)
    cache_ttl_seconds: float = Field(3600.0)

    # Data APIs
    google_maps_key: Optional[str] = Field(None)
    google_places_api_key: Optional[str] = Field(None)
    yelp_api_key: Optional[str] = Field(None)
    zomato_key: Optional[str] = Field(None)
    vendor_timeout_seconds: float = Field(10.0)

    # Crawlers
    crawl_city: str = Field("Chennai")
    crawl_lat: float = Field(13.0827)
    crawl_lng: float = Field(80.2707)
    crawl_radius_m: int = Field(10000)

    # Security
    service_token: Optional[str] = Field(None)
    allowed_origins: str = Field("http://localhost:5173,http://localhost:3000")

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def places_key(self) -> Optional[str]:
        """Key used for Google Places lookups; the crawler key wins over the maps key."""
        return self.google_places_api_key or self.google_maps_key

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
