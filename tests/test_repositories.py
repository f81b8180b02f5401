"""
Tests for the response stores and the persona store.
"""

import asyncio
import json

import pytest

from chat_orchestrator.entities import AIReply, Persona
from chat_orchestrator.errors import PersonaNotFoundError
from chat_orchestrator.protocols import PersonaCatalog, PersonaSource, ResponseStore
from chat_orchestrator.repositories import (
    DEFAULT_PERSONAS,
    InMemoryPersonaRepository,
    InMemoryResponseRepository,
    RedisResponseRepository,
)
from conftest import FakeClock


class FakeRedis:
    """Minimal stand-in for redis.asyncio.Redis."""

    def __init__(self, reachable: bool = True) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.reachable = reachable
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def ping(self):
        if not self.reachable:
            raise ConnectionError("connection refused")
        return True

    async def aclose(self):
        self.closed = True


# In-memory response store


def test_memory_store_roundtrip(store):
    reply = AIReply(content="hola", persona_id="p-1")
    asyncio.run(store.put("k", reply, 60))

    assert asyncio.run(store.get("k")) == reply
    assert asyncio.run(store.get("missing")) is None


def test_memory_store_expires_on_read():
    clock = FakeClock()
    store = InMemoryResponseRepository(clock=clock)
    asyncio.run(store.put("k", AIReply(content="hola"), 60))

    clock.advance(59)
    assert asyncio.run(store.get("k")) is not None

    clock.advance(1)
    assert asyncio.run(store.get("k")) is None
    assert len(store) == 0


def test_memory_store_is_bounded():
    clock = FakeClock()
    store = InMemoryResponseRepository(max_size=2, clock=clock)
    asyncio.run(store.put("a", AIReply(content="a"), 60))
    clock.advance(1)
    asyncio.run(store.put("b", AIReply(content="b"), 60))
    asyncio.run(store.put("c", AIReply(content="c"), 60))

    assert len(store) == 2
    assert asyncio.run(store.get("a")) is None
    assert asyncio.run(store.get("c")) is not None


def test_stores_satisfy_protocol(store):
    assert isinstance(store, ResponseStore)
    assert isinstance(RedisResponseRepository(redis_client=FakeRedis()), ResponseStore)


# Redis response store


def test_redis_store_writes_json_with_ttl():
    client = FakeRedis()
    repository = RedisResponseRepository(redis_client=client)

    asyncio.run(repository.put("ai_cache:abc", AIReply(content="¿Qué tal?", persona_id=None), 3600))

    assert client.ttls["ai_cache:abc"] == 3600
    assert json.loads(client.data["ai_cache:abc"]) == {"content": "¿Qué tal?", "persona_id": None}


def test_redis_store_reads_entries():
    client = FakeRedis()
    client.data["k"] = json.dumps({"content": "guardado", "persona_id": "p-2"})
    repository = RedisResponseRepository(redis_client=client)

    assert asyncio.run(repository.get("k")) == AIReply(content="guardado", persona_id="p-2")
    assert asyncio.run(repository.get("other")) is None


def test_redis_store_propagates_corrupt_entries():
    client = FakeRedis()
    client.data["k"] = "{not json"
    repository = RedisResponseRepository(redis_client=client)

    with pytest.raises(ValueError):
        asyncio.run(repository.get("k"))


def test_redis_health_check():
    assert asyncio.run(RedisResponseRepository(redis_client=FakeRedis()).health_check()) is True
    assert asyncio.run(RedisResponseRepository(redis_client=FakeRedis(reachable=False)).health_check()) is False


def test_redis_close():
    client = FakeRedis()
    asyncio.run(RedisResponseRepository(redis_client=client).close())
    assert client.closed is True


# Persona store


def test_persona_store_is_seeded(personas):
    all_personas = asyncio.run(personas.list_all())

    assert [p.name for p in all_personas] == [name for name, _ in DEFAULT_PERSONAS]
    assert sum(p.is_active for p in all_personas) == 1
    assert asyncio.run(personas.get_active()).name == "Joven Simpático"
    assert isinstance(personas, PersonaSource)
    assert isinstance(personas, PersonaCatalog)


def test_activate_switches_active_persona(personas):
    target = asyncio.run(personas.list_all())[2]

    activated = asyncio.run(personas.activate(target.id))

    assert activated.id == target.id and activated.is_active
    active = [p for p in asyncio.run(personas.list_all()) if p.is_active]
    assert [p.id for p in active] == [target.id]


def test_activate_unknown_persona(personas):
    with pytest.raises(PersonaNotFoundError):
        asyncio.run(personas.activate("does-not-exist"))


def test_only_one_persona_starts_active():
    repository = InMemoryPersonaRepository(
        [
            Persona(id="a", name="A", content="a", is_active=True),
            Persona(id="b", name="B", content="b", is_active=True),
        ]
    )

    assert asyncio.run(repository.get_active()).id == "a"
    assert [p.is_active for p in asyncio.run(repository.list_all())] == [True, False]


def test_empty_persona_store_has_no_active():
    assert asyncio.run(InMemoryPersonaRepository().get_active()) is None
