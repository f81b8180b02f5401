"""Chat provider protocol."""

from typing import Protocol, runtime_checkable

from chat_orchestrator.config import ProviderConfig


@runtime_checkable
class ChatProvider(Protocol):
    """Upstream chat-completion service.

    Example:
        ```python
        provider: ChatProvider = OpenAIChatProvider()
        text = await provider.complete(
            [{"role": "system", "content": "..."}, {"role": "user", "content": "Hola"}],
            ProviderConfig.from_env(),
        )
        ```
    """

    async def complete(self, messages: list[dict[str, str]], config: ProviderConfig) -> str:
        """Run one chat completion.

        Args:
            messages: Ordered {role, content} turns, system message first
            config: Credentials, endpoint and model to use

        Returns:
            The completion text
        """
        ...
