"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Missing NASA_API_KEY falls back to the shared DEMO_KEY (low daily quota)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - create_app() accepts an explicit Settings so tests never touch the cache
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEMO_API_KEY = "DEMO_KEY"
APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 5050
    environment: str = "production"

    # NASA APOD upstream
    nasa_api_key: str = DEMO_API_KEY
    nasa_api_url: str = "https://api.nasa.gov/planetary/apod"
    nasa_timeout_seconds: float = 10.0

    @field_validator("nasa_api_key", mode="before")
    @classmethod
    def blank_key_means_demo(cls, v):
        """An empty NASA_API_KEY= line in .env counts as unset."""
        if isinstance(v, str) and not v.strip():
            return DEMO_API_KEY
        return v

    # API
    cors_origin: str = "https://nasa-explorer-client-lake.vercel.app"

    # Rate limiting — fixed window per client IP
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    trust_forwarded_for: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def uses_demo_key(self) -> bool:
        return self.nasa_api_key == DEMO_API_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()
