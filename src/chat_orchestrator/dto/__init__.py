"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatTurnItem, SendMessageRequest
from .responses import (
    AIConfigResponse,
    ChatReplyResponse,
    HealthCheckResponse,
    PersonaItem,
    PersonaListResponse,
    QuotaStatusResponse,
)

__all__ = [
    "ChatTurnItem",
    "SendMessageRequest",
    "ChatReplyResponse",
    "PersonaItem",
    "PersonaListResponse",
    "QuotaStatusResponse",
    "HealthCheckResponse",
    "AIConfigResponse",
]
