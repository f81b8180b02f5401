"""AI reply domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AIReply:
    """A reply returned to the caller and stored in the response cache.

    Attributes:
        content: The reply text
        persona_id: Id of the persona that was active, if any
    """

    content: str
    persona_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the cache storage representation."""
        return {"content": self.content, "persona_id": self.persona_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AIReply":
        """Build from the cache storage representation.

        Raises:
            KeyError: If the content field is missing
        """
        return cls(content=data["content"], persona_id=data.get("persona_id"))
