"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the persona store,
the upstream chat provider) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis -> in-memory, OpenAI -> another provider)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from chat_orchestrator.protocols import ChatProvider, PersonaSource, ResponseStore

from .memory_repository import InMemoryResponseRepository
from .openai_provider import EMPTY_COMPLETION, OpenAIChatProvider
from .persona_repository import DEFAULT_PERSONAS, InMemoryPersonaRepository
from .redis_repository import RedisResponseRepository

__all__ = [
    "ChatProvider",
    "PersonaSource",
    "ResponseStore",
    "InMemoryResponseRepository",
    "RedisResponseRepository",
    "InMemoryPersonaRepository",
    "DEFAULT_PERSONAS",
    "OpenAIChatProvider",
    "EMPTY_COMPLETION",
]
