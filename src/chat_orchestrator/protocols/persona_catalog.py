"""Persona catalog protocol."""

from typing import Protocol, runtime_checkable

from chat_orchestrator.entities import Persona


@runtime_checkable
class PersonaCatalog(Protocol):
    """Listing and switching personas, as exposed over HTTP.

    Implementations must keep at most one persona active at a time.
    """

    async def list_all(self) -> list[Persona]:
        """Return every persona in display order."""
        ...

    async def activate(self, persona_id: str) -> Persona:
        """Make the given persona the only active one.

        Raises:
            PersonaNotFoundError: If no persona has this id
        """
        ...
