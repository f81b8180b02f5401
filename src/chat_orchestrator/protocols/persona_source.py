"""Persona source protocol."""

from typing import Protocol, runtime_checkable

from chat_orchestrator.entities import Persona


@runtime_checkable
class PersonaSource(Protocol):
    """Read access to the active persona.

    The persona lifecycle is owned by the configuration store; the
    orchestrator only ever reads the active one.
    """

    async def get_active(self) -> Persona | None:
        """Return the active persona, or None if none is active."""
        ...
