"""Domain exceptions raised by the orchestration layer.

Only QuotaExceededError is meant to reach callers of ChatService;
everything else is absorbed into an offline reply.
"""


class ChatOrchestratorError(Exception):
    """Base class for orchestration errors."""


class QuotaExceededError(ChatOrchestratorError):
    """The request quota for the current window is used up.

    The message is user-facing and should be shown verbatim.
    """

    def __init__(self, minutes_left: int, capacity: int) -> None:
        self.minutes_left = minutes_left
        self.capacity = capacity
        super().__init__(
            f"Rate limit exceeded. Try again in {minutes_left} minutes. "
            f"(Free tier: {capacity} requests/hour)"
        )


class ProviderTimeoutError(ChatOrchestratorError):
    """The caller's deadline elapsed before the provider answered."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Provider call timed out after {timeout:.1f}s")


class PersonaNotFoundError(ChatOrchestratorError):
    """No persona exists with the requested id."""

    def __init__(self, persona_id: str) -> None:
        self.persona_id = persona_id
        super().__init__(f"Persona not found: {persona_id}")
