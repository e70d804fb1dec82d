# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional .env file)
with defaults suitable for local development.

The Settings class is the main entry point and aggregates all subsettings.
A cached instance is provided via get_settings().

Example:
    >>> from fluency.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.cache.ttl_seconds
    86400
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PASSWORD = "fluency_password"


class DatabaseSettings(BaseSettings):
    """Relational database configuration.

    The database is the source of truth for every question and course.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        dsn: Full async connection URL. Overrides the components when set.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "fluency"
    password: SecretStr = SecretStr(DEFAULT_DB_PASSWORD)
    host: str = "fluency-db"
    port: int = 5432
    database: str = "fluency"
    dsn: str | None = None
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        if self.dsn:
            return self.dsn
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class RedisSettings(BaseSettings):
    """Redis configuration for the detail cache.

    Attributes:
        host: Redis server host.
        port: Redis server port.
        password: Redis password.
        database: Redis database number.
        max_connections: Maximum connection pool size.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        extra="ignore",
    )

    host: str = "fluency-redis"
    port: int = 6379
    password: SecretStr | None = None
    database: int = 0
    max_connections: int = 50

    @property
    def url(self) -> str:
        """Build the Redis connection URL."""
        if self.password is None:
            return f"redis://{self.host}:{self.port}/{self.database}"
        pwd = self.password.get_secret_value()
        return f"redis://:{pwd}@{self.host}:{self.port}/{self.database}"


class QdrantSettings(BaseSettings):
    """Qdrant configuration for the content search index.

    One collection is kept per content family. collection_prefix lets several
    deployments share a single Qdrant instance.

    Attributes:
        host: Qdrant server host.
        http_port: HTTP API port.
        grpc_port: gRPC API port.
        api_key: Optional API key for authentication.
        prefer_grpc: Whether to prefer gRPC over HTTP.
        timeout: Request timeout in seconds.
        collection_prefix: Prefix prepended to every collection name.
    """

    model_config = SettingsConfigDict(
        env_prefix="QDRANT_",
        extra="ignore",
    )

    host: str = "fluency-qdrant"
    http_port: int = 6333
    grpc_port: int = 6334
    api_key: SecretStr | None = None
    prefer_grpc: bool = False
    timeout: float = 30.0
    collection_prefix: str = ""

    @property
    def url(self) -> str:
        """Build the Qdrant HTTP URL."""
        return f"http://{self.host}:{self.http_port}"


class CacheSettings(BaseSettings):
    """Detail cache behaviour.

    Attributes:
        enabled: When False every cache read misses and every write is skipped.
        ttl_seconds: Lifetime of a cached detail entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        extra="ignore",
    )

    enabled: bool = True
    ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)


class SyncSettings(BaseSettings):
    """Cache/search synchronization behaviour.

    Attributes:
        serialize_per_root: Run rebuild-and-publish for one root at a time
            inside this process.
        search_page_size: Default page size for index queries.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNC_",
        extra="ignore",
    )

    serialize_per_root: bool = True
    search_page_size: int = Field(default=20, gt=0, le=500)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        db: Database settings.
        redis: Redis settings.
        qdrant: Qdrant settings.
        cache: Detail cache settings.
        sync: Synchronization settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.db.dsn is None and self.db.password.get_secret_value() == DEFAULT_DB_PASSWORD:
                raise ValueError(
                    "Database password must be changed from default in production. "
                    "Set DB_PASSWORD or DB_DSN environment variable."
                )
            if self.debug:
                raise ValueError("Debug mode must be disabled in production. Set DEBUG=false.")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or after changing environment variables.
    """
    get_settings.cache_clear()
