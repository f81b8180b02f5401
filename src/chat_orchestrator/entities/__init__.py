"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .ai_reply import AIReply
from .chat_turn import ChatTurn, Role
from .outcome import CallFailed, CallOutcome, CallSucceeded
from .persona import Persona

__all__ = [
    "AIReply",
    "ChatTurn",
    "Role",
    "Persona",
    "CallOutcome",
    "CallSucceeded",
    "CallFailed",
]
