import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

# Placeholder key shipped in example env files; treated as "not configured".
DEVELOPMENT_API_KEY = "fake-key-for-development"
DEFAULT_BASE_URL = "https://api.aimlapi.com/v1"
DEFAULT_MODEL = "google/gemma-3-12b-it"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Response cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "ai_cache")

    # Quota (AIML free tier allows 10/hour, stay below it)
    quota_capacity: int = int(os.getenv("QUOTA_CAPACITY", "8"))
    quota_window_seconds: int = int(os.getenv("QUOTA_WINDOW_SECONDS", "3600"))

    # Retries
    retry_max_retries: int = int(os.getenv("RETRY_MAX_RETRIES", "3"))
    retry_base_delay: float = float(os.getenv("RETRY_BASE_DELAY", "1.0"))

    # Provider
    provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "30"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def uses_redis(self) -> bool:
        """Check if responses should be cached in Redis.

        Returns:
            True if the Redis backend is configured, False for in-memory
        """
        return self.cache_backend.lower() == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend.lower() not in ("redis", "memory"):
            raise ValueError(f"CACHE_BACKEND must be 'redis' or 'memory', got {self.cache_backend!r}")

        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.quota_capacity < 1:
            raise ValueError("QUOTA_CAPACITY must be at least 1")

        if self.quota_window_seconds <= 0:
            raise ValueError("QUOTA_WINDOW_SECONDS must be positive")

        if self.retry_max_retries < 0:
            raise ValueError("RETRY_MAX_RETRIES must not be negative")


@dataclass(frozen=True)
class ProviderConfig:
    """Upstream provider configuration.

    Unlike Settings this is re-read from the environment on every request,
    so rotating credentials or switching endpoints needs no restart.
    """

    api_key: str | None
    base_url: str
    model: str

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Read the current provider configuration from the environment."""
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            base_url=os.getenv("AI_BASE_URL") or DEFAULT_BASE_URL,
            model=os.getenv("AI_MODEL") or DEFAULT_MODEL,
        )

    @property
    def has_credentials(self) -> bool:
        """Check if a real API key is configured."""
        return bool(self.api_key) and self.api_key != DEVELOPMENT_API_KEY


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
