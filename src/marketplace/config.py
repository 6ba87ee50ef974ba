"""Marketplace settings.

Loaded from environment variables with the ``MARKETPLACE_`` prefix:

- MARKETPLACE_LOCK_BACKEND: ``memory`` (single instance) or ``redis``
- MARKETPLACE_REDIS_URL: Redis connection string for the redis lock backend
- MARKETPLACE_LOCK_MAX_ATTEMPTS: acquisition attempts per critical section
- MARKETPLACE_LOCK_ACQUIRE_TIMEOUT: seconds to wait on each attempt
- MARKETPLACE_LOCK_LEASE: seconds before an abandoned redis lock expires
- MARKETPLACE_LOCK_BACKOFF_BASE / MARKETPLACE_LOCK_BACKOFF_MAX: retry delays
- MARKETPLACE_STOCK_UPDATE_ATTEMPTS: compare-and-set rounds per stock decrement
- MARKETPLACE_LOG_LEVEL / MARKETPLACE_LOG_FORMAT / MARKETPLACE_LOG_DIR
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        extra="ignore",
    )

    lock_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"

    lock_max_attempts: int = Field(5, ge=1)
    lock_acquire_timeout: float = Field(2.0, gt=0)
    lock_lease: float = Field(30.0, gt=0)
    lock_backoff_base: float = Field(0.05, ge=0)
    lock_backoff_max: float = Field(1.0, ge=0)

    stock_update_attempts: int = Field(5, ge=1)

    # Unset values follow ENV / ENVIRONMENT / PROTEAN_ENV
    log_level: str | None = None
    log_format: Literal["console", "json"] | None = None
    log_dir: str = "logs"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
