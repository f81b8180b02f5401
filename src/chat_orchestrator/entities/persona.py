"""Persona domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Persona:
    """System instruction that sets the assistant's tone.

    At most one persona is active at a time.

    Attributes:
        id: Stable identifier
        name: Display name, also used to pick an offline reply style
        content: System prompt text sent to the provider
        is_active: Whether this persona is the active one
    """

    id: str
    name: str
    content: str
    is_active: bool = False
