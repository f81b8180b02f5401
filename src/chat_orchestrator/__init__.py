"""Chat Orchestrator - quota-limited, cached AI chat replies.

This package turns a chat message plus conversation history into a
reply from an OpenAI-compatible provider, with a content-addressed
response cache, a fixed-window request quota, retries with backoff,
and an offline responder for when the provider is unavailable.

Layers:
    - protocols: Interface contracts (ResponseStore, PersonaSource, ChatProvider)
    - repositories: Data access implementations
    - services: Business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from chat_orchestrator.repositories import (
        InMemoryPersonaRepository,
        InMemoryResponseRepository,
        OpenAIChatProvider,
    )
    from chat_orchestrator.services import ChatService

    service = ChatService.create(
        persona_source=InMemoryPersonaRepository.create(),
        response_store=InMemoryResponseRepository(),
        provider=OpenAIChatProvider.create(),
    )
    reply = await service.send_message("Hola", history=[])
    ```

For HTTP API:
    ```python
    from chat_orchestrator.api.app import app
    ```
"""

from chat_orchestrator.config import ProviderConfig, get_redis_client, settings
from chat_orchestrator.entities import AIReply, ChatTurn, Persona, Role
from chat_orchestrator.errors import ChatOrchestratorError, QuotaExceededError
from chat_orchestrator.protocols import ChatProvider, PersonaSource, ResponseStore
from chat_orchestrator.repositories import (
    InMemoryPersonaRepository,
    InMemoryResponseRepository,
    OpenAIChatProvider,
    RedisResponseRepository,
)
from chat_orchestrator.services import ChatService, OfflineResponder, QuotaTracker, RetryExecutor

__all__ = [
    # Configuration
    "settings",
    "ProviderConfig",
    "get_redis_client",
    # Protocols (interfaces)
    "ChatProvider",
    "PersonaSource",
    "ResponseStore",
    # Services (business logic)
    "ChatService",
    "OfflineResponder",
    "QuotaTracker",
    "RetryExecutor",
    # Repositories (data access)
    "InMemoryPersonaRepository",
    "InMemoryResponseRepository",
    "OpenAIChatProvider",
    "RedisResponseRepository",
    # Entities (domain models)
    "AIReply",
    "ChatTurn",
    "Persona",
    "Role",
    # Errors
    "ChatOrchestratorError",
    "QuotaExceededError",
]
