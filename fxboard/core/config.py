from functools import lru_cache

from fastapi import Request
from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    RATES_API_BASE_URL, RATES_CACHE_TTL_SECONDS, RATE_SOURCE, PIVOT_CURRENCY).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "FX Board"
    debug: bool = False
    version: str = "0.1.0"

    # Rate feed
    # Final URL appends "/{base}.json"
    rates_api_base_url: AnyHttpUrl = (
        "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies"
    )
    http_timeout_seconds: float = 5.0
    http_retries: int = 0

    # Caching: entries older than this are stale but still usable as fallback
    rates_cache_ttl_seconds: int = 24 * 60 * 60

    # Allowed: 'http' (live feed), 'static' (built-in offline rates)
    rate_source: str = "http"

    # Conversions always route through the pivot table
    pivot_currency: str = "jpy"
    default_base_currency: str = "jpy"

    def init_post_load(self) -> None:
        """Normalize currency codes and validate choices."""
        from fxboard.models.constants import normalize_code

        self.pivot_currency = normalize_code(self.pivot_currency)
        self.default_base_currency = normalize_code(self.default_base_currency)
        allowed = {"http", "static"}
        if self.rate_source not in allowed:
            raise ValueError(
                f"Unsupported rate_source '{self.rate_source}'. Allowed: {allowed}"
            )
        if self.rates_cache_ttl_seconds <= 0:
            raise ValueError("rates_cache_ttl_seconds must be positive")
        if self.http_retries < 0:
            raise ValueError("http_retries cannot be negative")

    @property
    def feed_base_url(self) -> str:
        return str(self.rates_api_base_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings


def app_settings(request: Request) -> Settings:
    """FastAPI dependency: settings the running app was built with."""
    return getattr(request.app.state, "settings", None) or get_settings()
