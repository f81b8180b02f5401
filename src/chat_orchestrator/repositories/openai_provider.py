"""OpenAI-compatible chat provider.

Talks to any endpoint that speaks the OpenAI chat-completions protocol
(AIML API by default). The client is a cached factory: it is built on
first use and rebuilt whenever the configured API key or base URL
changes, so credentials can be rotated without a restart.
"""

import logging
import threading

import httpx
from openai import AsyncOpenAI

from chat_orchestrator.config import ProviderConfig, settings

logger = logging.getLogger(__name__)

MAX_TOKENS = 500
TEMPERATURE = 0.7
EMPTY_COMPLETION = "Lo siento, no pude generar una respuesta."


class OpenAIChatProvider:
    """OpenAI implementation of the ChatProvider protocol.

    This class satisfies the ChatProvider protocol through structural
    typing - no explicit inheritance needed.

    The SDK's built-in retries are disabled; retrying is the job of
    RetryExecutor so that every attempt is charged against the quota.

    Example:
        ```python
        provider = OpenAIChatProvider.create(timeout=30.0)
        text = await provider.complete(messages, ProviderConfig.from_env())
        ```
    """

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize the provider.

        Args:
            timeout: Per-request network timeout in seconds.
        """
        self._timeout = timeout
        self._lock = threading.Lock()
        self._client: AsyncOpenAI | None = None
        self._last_config: tuple[str, str] | None = None
        self._retired: list[AsyncOpenAI] = []

    @classmethod
    def create(cls, timeout: float | None = None) -> "OpenAIChatProvider":
        """Factory method to create OpenAIChatProvider with defaults.

        Args:
            timeout: Per-request timeout in seconds. If None, uses settings.

        Returns:
            Configured OpenAIChatProvider
        """
        return cls(timeout=timeout or settings.provider_timeout)

    def get_client(self, config: ProviderConfig) -> AsyncOpenAI:
        """Return a client bound to the given credentials and endpoint.

        Args:
            config: Current provider configuration

        Returns:
            A cached AsyncOpenAI client, rebuilt if the key or URL changed
        """
        current = (config.api_key or "", config.base_url)
        with self._lock:
            if self._client is None or self._last_config != current:
                if self._client is not None:
                    logger.info("Provider configuration changed, rebuilding client")
                    self._retired.append(self._client)
                self._client = AsyncOpenAI(
                    api_key=current[0],
                    base_url=config.base_url,
                    timeout=httpx.Timeout(self._timeout, connect=5.0),
                    max_retries=0,
                )
                self._last_config = current
            return self._client

    async def complete(self, messages: list[dict[str, str]], config: ProviderConfig) -> str:
        """Run one chat completion.

        Args:
            messages: Ordered {role, content} turns, system message first
            config: Credentials, endpoint and model to use

        Returns:
            The first choice's text, or EMPTY_COMPLETION if there is none
        """
        client = self.get_client(config)
        completion = await client.chat.completions.create(
            model=config.model,
            messages=messages,
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )

        if not completion.choices:
            return EMPTY_COMPLETION
        return completion.choices[0].message.content or EMPTY_COMPLETION

    async def close(self) -> None:
        """Close the current client and any replaced by a configuration change.

        Replaced clients stay open until this is called; requests started
        before the change may still hold them.
        """
        with self._lock:
            clients = self._retired
            if self._client is not None:
                clients.append(self._client)
            self._retired = []
            self._client = None
            self._last_config = None

        for client in clients:
            await client.close()
        if clients:
            logger.info("Closed %d provider client(s)", len(clients))
