"""Redis implementation of ResponseStore.

Replies are stored as JSON strings under their cache key with SETEX,
so Redis expires them on its own.
"""

import json

import redis.asyncio as redis

from chat_orchestrator.config import get_redis_client
from chat_orchestrator.entities import AIReply


class RedisResponseRepository:
    """Redis implementation of the ResponseStore protocol.

    This class satisfies the ResponseStore protocol through structural
    typing - no explicit inheritance needed.

    Errors from the Redis client (connection refused, timeouts) and
    from decoding a corrupt entry are propagated to the caller.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis response repository.

        Args:
            redis_client: asyncio Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls) -> "RedisResponseRepository":
        """Factory method to create RedisResponseRepository with defaults.

        Returns:
            Configured RedisResponseRepository
        """
        return cls()

    async def get(self, key: str) -> AIReply | None:
        """Look up a cached reply.

        Args:
            key: The content-addressed cache key

        Returns:
            The cached reply, or None if absent
        """
        raw = await self._client.get(key)
        if raw is None:
            return None

        return AIReply.from_dict(json.loads(raw))

    async def put(self, key: str, reply: AIReply, ttl: int) -> None:
        """Store a reply with an expiry.

        Args:
            key: The content-addressed cache key
            reply: The reply to store
            ttl: Time-to-live in seconds
        """
        payload = json.dumps(reply.to_dict(), ensure_ascii=False)
        await self._client.setex(key, ttl, payload)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = await self._client.ping()
            return bool(result)
        except Exception:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
