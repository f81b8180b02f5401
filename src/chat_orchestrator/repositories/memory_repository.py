"""In-memory implementation of ResponseStore.

Used when Redis is not configured and in tests. Entries expire
passively: an expired entry is dropped when it is next read.
"""

import asyncio
import time
from collections.abc import Callable

from chat_orchestrator.entities import AIReply


class InMemoryResponseRepository:
    """asyncio-safe TTL dictionary satisfying the ResponseStore protocol."""

    def __init__(self, max_size: int = 2048, clock: Callable[[], float] = time.time) -> None:
        self._max_size = max_size
        self._clock = clock
        self._store: dict[str, tuple[float, AIReply]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> AIReply | None:
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, reply = entry
            if self._clock() >= expires_at:
                # expired
                del self._store[key]
                return None
            return reply

    async def put(self, key: str, reply: AIReply, ttl: int) -> None:
        async with self._lock:
            if key not in self._store and len(self._store) >= self._max_size:
                # Evict the entry closest to expiry
                oldest_key = min(self._store.items(), key=lambda kv: kv[1][0])[0]
                self._store.pop(oldest_key, None)
            self._store[key] = (self._clock() + ttl, reply)

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._store)
