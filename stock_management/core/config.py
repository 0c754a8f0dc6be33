"""Settings for the authorization core: logging, Redis and permission caching.

Read from environment variables and an optional .env file; invalid values
fail when settings are first loaded.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Every field has a default; validate_cache_and_redis rejects values that
    would make permission caching misbehave (negative TTL, invalid port).
    """

    # App
    app_name: str = "stock-management"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Multi-tenancy: tenant id used for system-wide data.
    system_tenant_id: str = "system"

    # Redis Cache (permission resolution)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_permissions: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_and_redis(self) -> "Settings":
        """Validate cache TTL and redis connection settings."""
        if self.cache_ttl_permissions < 0:
            raise ValueError(
                f"cache_ttl_permissions must be >= 0, got: {self.cache_ttl_permissions}"
            )
        if not 0 < self.redis_port < 65536:
            raise ValueError(f"redis_port out of range: {self.redis_port}")
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level {self.log_level!r}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Load Settings once per process.

    Tests that change environment variables must call
    get_settings.cache_clear() first.
    """
    return Settings()
