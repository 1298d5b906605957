"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Numeric limits and TTLs are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from orderlookup.core.constants import MIN_CAPABILITY_TTL_SECONDS


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default; an empty database_url disables the SQL
    gateway (the HTTP layer then answers 503 for lookups).
    """

    # App
    app_name: str = "orderlookup"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (async SQLAlchemy URL, e.g. postgresql+asyncpg://... or sqlite+aiosqlite:///...)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Stores and fields the lookup chain reads
    orders_store: str = "orders"
    notifications_store: str = "notifications"
    delivery_partners_store: str = "delivery_partners"
    secondary_key_field: str = "reference_number"

    # Lookup heuristics
    short_id_length: int = 8
    prefix_scan_limit: int = 200
    association_candidate_limit: int = 10

    # Resolution cache TTLs (seconds)
    cache_ttl_entities: int = 120
    cache_ttl_relationships: int = 120
    cache_ttl_capabilities: int = MIN_CAPABILITY_TTL_SECONDS

    # Degraded mode: the HTTP allow_synthetic flag is ignored unless this is set.
    synthetic_fallback_enabled: bool = False

    # Gateway retry (exponential backoff on transient errors)
    gateway_retry_attempts: int = 3
    gateway_retry_initial_delay_ms: int = 100
    gateway_retry_max_delay_ms: int = 5000
    gateway_retry_backoff_multiplier: float = 2.0

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject non-positive lengths, limits, TTLs and retry settings."""
        positive = {
            "short_id_length": self.short_id_length,
            "prefix_scan_limit": self.prefix_scan_limit,
            "association_candidate_limit": self.association_candidate_limit,
            "cache_ttl_entities": self.cache_ttl_entities,
            "cache_ttl_relationships": self.cache_ttl_relationships,
            "cache_ttl_capabilities": self.cache_ttl_capabilities,
            "gateway_retry_attempts": self.gateway_retry_attempts,
            "request_timeout_seconds": self.request_timeout_seconds,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got: {value!r}")
        if self.gateway_retry_initial_delay_ms < 0 or self.gateway_retry_max_delay_ms < 0:
            raise ValueError("gateway retry delays must not be negative")
        if self.gateway_retry_backoff_multiplier < 1.0:
            raise ValueError(
                "gateway_retry_backoff_multiplier must be >= 1.0, "
                f"got: {self.gateway_retry_backoff_multiplier!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
