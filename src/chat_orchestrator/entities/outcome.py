"""Result variants for a provider call."""

from dataclasses import dataclass

from .ai_reply import AIReply


@dataclass(frozen=True)
class CallSucceeded:
    """The provider produced a reply."""

    reply: AIReply


@dataclass(frozen=True)
class CallFailed:
    """The provider call failed after retries (or without retrying)."""

    error: Exception


CallOutcome = CallSucceeded | CallFailed
