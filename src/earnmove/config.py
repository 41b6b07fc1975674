"""Application configuration via pydantic-settings."""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from earnmove.core.constants import (
    DEFAULT_BATCH_COOLDOWN_SECONDS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_EODHD_API_URL,
    DEFAULT_EXCHANGE,
    DEFAULT_HISTORY_YEARS,
    DEFAULT_LOOKAHEAD_YEARS,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SCHEDULE_CRON,
    EARNINGS_CACHE_PREFIX,
    EARNINGS_CACHE_TTL_SECONDS,
    MIN_PRICE_POINTS,
)
from earnmove.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Core
    env: Literal["development", "staging", "production"] = Field(
        default="development", alias="EARNMOVE_ENV"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="EARNMOVE_LOG_LEVEL"
    )

    # EODHD (symbol list, earnings calendar, daily prices)
    eodhd_api_key: SecretStr | None = Field(default=None)
    eodhd_api_url: str = Field(default=DEFAULT_EODHD_API_URL)
    exchange: str = Field(
        default=DEFAULT_EXCHANGE,
        description="Exchange code used for the symbol list and as the ticker suffix",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Upper bound on a single provider request, connection to last byte",
    )
    max_concurrent_requests: int = Field(
        default=DEFAULT_MAX_CONCURRENT_REQUESTS,
        ge=1,
        description="Provider requests in flight at once; also the HTTP connection pool size",
    )

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0")
    cache_prefix: str = Field(default=EARNINGS_CACHE_PREFIX)
    cache_ttl_seconds: int = Field(default=EARNINGS_CACHE_TTL_SECONDS, gt=0)

    # Batching
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=1,
        description="Symbols processed concurrently per group",
    )
    batch_cooldown_seconds: float = Field(
        default=DEFAULT_BATCH_COOLDOWN_SECONDS,
        ge=0,
        description="Pause between groups so the provider rate window resets",
    )

    # Estimation windows
    history_years: int = Field(default=DEFAULT_HISTORY_YEARS, ge=1)
    lookahead_years: int = Field(default=DEFAULT_LOOKAHEAD_YEARS, ge=1)
    min_price_points: int = Field(default=MIN_PRICE_POINTS, ge=1)

    # Universe override (skips the symbol-list fetch when non-empty)
    symbols: Annotated[list[str], NoDecode] = Field(default_factory=list)

    # Periodic mode
    schedule_cron: str = Field(default=DEFAULT_SCHEDULE_CRON)

    @field_validator("symbols", mode="before")
    @classmethod
    def parse_symbols(cls, v: str | list[str] | None) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                v = json.loads(v)
            else:
                v = [s.strip() for s in v.split(",") if s.strip()]
        return [s.strip().upper() for s in v if s.strip()]

    @field_validator("exchange")
    @classmethod
    def normalize_exchange(cls, v: str) -> str:
        return v.strip().upper()

    def require_api_key(self) -> str:
        """Return the EODHD API key or raise if it is not configured."""
        if self.eodhd_api_key is None or not self.eodhd_api_key.get_secret_value():
            raise ConfigurationError("EODHD_API_KEY is not set")
        return self.eodhd_api_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
