"""Chat turn domain entity."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Author of a chat turn."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"


@dataclass(frozen=True)
class ChatTurn:
    """A single message in a conversation history.

    Histories are ordered oldest first and are read-only to this package.

    Attributes:
        role: Who wrote the turn
        content: The message text
        persona_id: Persona that produced an assistant turn, if any
    """

    role: Role
    content: str
    persona_id: str | None = None
