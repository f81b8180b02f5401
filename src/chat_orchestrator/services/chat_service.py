"""Chat orchestration service.

Turns a user message plus conversation history into an AI reply:

1. Resolve the active persona
2. Build the content-addressed cache key
3. Return a cached reply if there is one (no quota charge)
4. Refuse with QuotaExceededError if the window is used up
5. Without real credentials, answer offline and cache that answer
6. Otherwise call the provider with retries, charging quota per attempt
7. Cache and return the provider's reply, or fall back to an
   uncached offline reply if the call failed
"""

import logging
from collections.abc import Callable, Sequence

from chat_orchestrator.config import ProviderConfig, settings
from chat_orchestrator.entities import (
    AIReply,
    CallFailed,
    CallOutcome,
    CallSucceeded,
    ChatTurn,
    Persona,
    Role,
)
from chat_orchestrator.errors import QuotaExceededError
from chat_orchestrator.protocols import ChatProvider, PersonaSource, ResponseStore
from chat_orchestrator.services.cache_keys import build_cache_key
from chat_orchestrator.services.offline import OfflineResponder
from chat_orchestrator.services.quota import QuotaTracker
from chat_orchestrator.services.retry import RetryExecutor

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "Eres un asistente de IA útil y amigable. Responde de manera clara y concisa."

# Turns of history sent upstream (to stay within the context budget).
PROVIDER_HISTORY_WINDOW = 10


def build_provider_messages(
    user_message: str,
    history: Sequence[ChatTurn],
    persona: Persona | None,
) -> list[dict[str, str]]:
    """Assemble the chat-completion message list.

    Args:
        user_message: The new user message
        history: Conversation history, oldest first
        persona: The active persona, if any

    Returns:
        System message, the last PROVIDER_HISTORY_WINDOW turns, then the user message
    """
    messages = [{"role": "system", "content": persona.content if persona else DEFAULT_SYSTEM_PROMPT}]

    for turn in list(history)[-PROVIDER_HISTORY_WINDOW:]:
        role = "user" if Role(turn.role) is Role.USER else "assistant"
        messages.append({"role": role, "content": turn.content})

    messages.append({"role": "user", "content": user_message})
    return messages


class ChatService:
    """Core orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - PersonaSource: where the active persona comes from
    - ResponseStore: Redis or in-memory response cache
    - ChatProvider: the upstream chat-completion API

    The quota tracker is shared by reference, so one instance must be
    created per process and handed to the service.

    Example:
        ```python
        service = ChatService.create(
            persona_source=InMemoryPersonaRepository.create(),
            response_store=InMemoryResponseRepository(),
            provider=OpenAIChatProvider.create(),
        )
        reply = await service.send_message("Hola", history=[])
        ```
    """

    def __init__(
        self,
        persona_source: PersonaSource,
        response_store: ResponseStore,
        provider: ChatProvider,
        quota: QuotaTracker,
        retry: RetryExecutor,
        offline: OfflineResponder | None = None,
        config_loader: Callable[[], ProviderConfig] = ProviderConfig.from_env,
        cache_ttl: int | None = None,
        cache_key_prefix: str | None = None,
    ) -> None:
        """Initialize the chat service.

        Args:
            persona_source: Active persona lookup (required).
            response_store: Response cache backend (required).
            provider: Upstream chat provider (required).
            quota: Process-wide quota tracker (required).
            retry: Retry policy for provider calls (required).
            offline: Fallback reply generator. Defaults to a new OfflineResponder.
            config_loader: Reads provider configuration at call time.
            cache_ttl: Cache entry TTL in seconds. Defaults to settings.
            cache_key_prefix: Namespace for cache keys. Defaults to settings.
        """
        self._personas = persona_source
        self._store = response_store
        self._provider = provider
        self._quota = quota
        self._retry = retry
        self._offline = offline or OfflineResponder()
        self._config_loader = config_loader
        self._ttl = cache_ttl or settings.cache_ttl
        self._key_prefix = cache_key_prefix or settings.cache_key_prefix

    @classmethod
    def create(
        cls,
        persona_source: PersonaSource,
        response_store: ResponseStore,
        provider: ChatProvider,
        quota: QuotaTracker | None = None,
        retry: RetryExecutor | None = None,
    ) -> "ChatService":
        """Factory method to create ChatService with settings-based defaults.

        Args:
            persona_source: Active persona lookup (required).
            response_store: Response cache backend (required).
            provider: Upstream chat provider (required).
            quota: Quota tracker. If None, creates one from settings.
            retry: Retry executor. If None, creates one from settings.

        Returns:
            Configured ChatService instance
        """
        return cls(
            persona_source=persona_source,
            response_store=response_store,
            provider=provider,
            quota=quota or QuotaTracker.create(),
            retry=retry or RetryExecutor.create(),
        )

    async def send_message(
        self,
        user_message: str,
        history: Sequence[ChatTurn],
        timeout: float | None = None,
    ) -> AIReply:
        """Get an AI reply for a user message.

        Args:
            user_message: The new user message
            history: Conversation history, oldest first
            timeout: Optional deadline in seconds for the provider call

        Returns:
            The reply, from cache, the provider, or the offline responder

        Raises:
            QuotaExceededError: If the quota window is used up
        """
        persona = await self._resolve_persona()
        config = self.provider_config()

        cache_key = build_cache_key(user_message, history, persona, config.model, prefix=self._key_prefix)

        cached = await self._read_cache(cache_key)
        if cached is not None:
            return cached

        if not self._quota_allows():
            raise QuotaExceededError(self._quota.minutes_left(), self._quota.capacity)

        if not config.has_credentials:
            reply = self._offline.generate(user_message, persona)
            await self._write_cache(cache_key, reply)
            return reply

        messages = build_provider_messages(user_message, history, persona)
        outcome = await self._call_provider(messages, config, persona, timeout)

        if isinstance(outcome, CallSucceeded):
            await self._write_cache(cache_key, outcome.reply)
            return outcome.reply

        if isinstance(outcome.error, QuotaExceededError):
            raise outcome.error

        logger.error("AI provider call failed, using offline reply: %r", outcome.error)
        return self._offline.generate(user_message, persona)

    async def _call_provider(
        self,
        messages: list[dict[str, str]],
        config: ProviderConfig,
        persona: Persona | None,
        timeout: float | None,
    ) -> CallOutcome:
        async def attempt() -> str:
            # Charged per attempt, retries included.
            count = self._quota.record()
            logger.info("Making AI request (%d/%d this window)...", count, self._quota.capacity)
            return await self._provider.complete(messages, config)

        try:
            content = await self._retry.execute(attempt, timeout=timeout)
        except Exception as e:
            return CallFailed(error=e)

        return CallSucceeded(reply=AIReply(content=content, persona_id=persona.id if persona else None))

    async def _resolve_persona(self) -> Persona | None:
        try:
            return await self._personas.get_active()
        except Exception as e:
            logger.warning("Active persona lookup failed, using default: %s", e)
            return None

    async def _read_cache(self, key: str) -> AIReply | None:
        try:
            cached = await self._store.get(key)
        except Exception as e:
            logger.warning("Cache read error: %s", e)
            return None

        if cached is not None:
            logger.info("Cache hit for AI request")
        return cached

    async def _write_cache(self, key: str, reply: AIReply) -> None:
        try:
            await self._store.put(key, reply, self._ttl)
            logger.info("Response cached")
        except Exception as e:
            logger.warning("Cache write error: %s", e)

    def _quota_allows(self) -> bool:
        try:
            return self._quota.allow()
        except Exception as e:
            logger.warning("Quota check failed, allowing request: %s", e)
            return True

    async def is_healthy(self) -> bool:
        """Check if the response cache is reachable."""
        try:
            return await self._store.health_check()
        except Exception:
            return False

    @property
    def quota(self) -> QuotaTracker:
        """Get the shared quota tracker."""
        return self._quota

    def provider_config(self) -> ProviderConfig:
        """Read the provider configuration the next request will use."""
        return self._config_loader()
