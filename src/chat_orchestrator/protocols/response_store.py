"""Response store protocol.

Defines the interface for the key/value store backing the response cache.

Implementations can include:
- Redis (shared between processes)
- In-memory TTL dictionary (default, single process)
"""

from typing import Protocol, runtime_checkable

from chat_orchestrator.entities import AIReply


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for response cache backends.

    Implementations are allowed to raise on connectivity or
    serialization problems. Callers treat the cache as best effort
    and must not let those errors abort a request.
    """

    async def get(self, key: str) -> AIReply | None:
        """Look up a cached reply.

        Args:
            key: The content-addressed cache key

        Returns:
            The cached reply, or None if absent or expired
        """
        ...

    async def put(self, key: str, reply: AIReply, ttl: int) -> None:
        """Store a reply.

        Args:
            key: The content-addressed cache key
            reply: The reply to store
            ttl: Time-to-live in seconds
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
