"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .cache_keys import build_cache_key
from .chat_service import ChatService, build_provider_messages
from .offline import OfflineResponder, PersonaStyle, classify_persona
from .quota import QuotaStatus, QuotaTracker, QuotaWindow
from .retry import RetryExecutor, is_retryable

__all__ = [
    "ChatService",
    "build_provider_messages",
    "build_cache_key",
    "OfflineResponder",
    "PersonaStyle",
    "classify_persona",
    "QuotaTracker",
    "QuotaWindow",
    "QuotaStatus",
    "RetryExecutor",
    "is_retryable",
]
