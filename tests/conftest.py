"""Shared fixtures and fakes for the test suite."""

import asyncio

import pytest

from chat_orchestrator.config import ProviderConfig
from chat_orchestrator.entities import AIReply, Persona
from chat_orchestrator.repositories import InMemoryPersonaRepository, InMemoryResponseRepository
from chat_orchestrator.services import ChatService, OfflineResponder, QuotaTracker, RetryExecutor

WINDOW = 3600
CAPACITY = 8


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that only records the requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StatusError(Exception):
    """Error carrying an HTTP status, like the OpenAI SDK's APIStatusError."""

    def __init__(self, status_code: int, message: str = "upstream error") -> None:
        super().__init__(message)
        self.status_code = status_code


class FakeProvider:
    """ChatProvider that replays scripted results.

    Each item in ``script`` is either a string (returned) or an
    exception (raised). The last item repeats once the script runs out.
    """

    def __init__(self, *script: str | Exception, delay: float = 0.0) -> None:
        self.script = list(script) or ["Respuesta del modelo"]
        self.delay = delay
        self.calls: list[tuple[list[dict[str, str]], ProviderConfig]] = []

    async def complete(self, messages: list[dict[str, str]], config: ProviderConfig) -> str:
        self.calls.append((messages, config))
        if self.delay:
            await asyncio.sleep(self.delay)
        index = min(len(self.calls), len(self.script)) - 1
        result = self.script[index]
        if isinstance(result, Exception):
            raise result
        return result


class BrokenStore:
    """ResponseStore whose every operation fails."""

    def __init__(self) -> None:
        self.put_attempts = 0

    async def get(self, key: str) -> AIReply | None:
        raise ConnectionError("redis unreachable")

    async def put(self, key: str, reply: AIReply, ttl: int) -> None:
        self.put_attempts += 1
        raise ConnectionError("redis unreachable")

    async def health_check(self) -> bool:
        return False


class BrokenPersonaSource:
    async def get_active(self) -> Persona | None:
        raise RuntimeError("database down")


def provider_config(api_key: str | None = "sk-test", model: str = "test-model") -> ProviderConfig:
    return ProviderConfig(api_key=api_key, base_url="https://llm.example.test/v1", model=model)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def quota(clock: FakeClock) -> QuotaTracker:
    return QuotaTracker(capacity=CAPACITY, window_seconds=WINDOW, clock=clock)


@pytest.fixture
def personas() -> InMemoryPersonaRepository:
    return InMemoryPersonaRepository.create()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryResponseRepository:
    return InMemoryResponseRepository(clock=clock)


@pytest.fixture
def make_service(personas, store, quota, sleep):
    """Build a ChatService around fakes; keyword arguments override the parts."""

    def _make(
        provider: FakeProvider | None = None,
        config: ProviderConfig | None = None,
        max_retries: int = 3,
        **overrides,
    ) -> ChatService:
        current = config or provider_config()
        parts = {
            "persona_source": personas,
            "response_store": store,
            "provider": provider or FakeProvider(),
            "quota": quota,
            "retry": RetryExecutor(max_retries=max_retries, sleep=sleep, rng=lambda: 0.0),
            "offline": OfflineResponder(),
            "config_loader": lambda: current,
            "cache_ttl": 3600,
        }
        parts.update(overrides)
        return ChatService(**parts)

    return _make
