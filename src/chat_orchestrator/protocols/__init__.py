"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> in-memory, OpenAI -> another provider)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .chat_provider import ChatProvider
from .persona_catalog import PersonaCatalog
from .persona_source import PersonaSource
from .response_store import ResponseStore

__all__ = [
    "ChatProvider",
    "PersonaCatalog",
    "PersonaSource",
    "ResponseStore",
]
