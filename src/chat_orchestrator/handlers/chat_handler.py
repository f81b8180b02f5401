"""HTTP handlers for chat operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import HTTPException, status

from chat_orchestrator.dto import (
    AIConfigResponse,
    ChatReplyResponse,
    HealthCheckResponse,
    PersonaItem,
    PersonaListResponse,
    QuotaStatusResponse,
    SendMessageRequest,
)
from chat_orchestrator.entities import Persona
from chat_orchestrator.errors import PersonaNotFoundError, QuotaExceededError
from chat_orchestrator.protocols import PersonaCatalog
from chat_orchestrator.services import ChatService

logger = logging.getLogger(__name__)


def _persona_item(persona: Persona) -> PersonaItem:
    return PersonaItem(
        id=persona.id,
        name=persona.name,
        content=persona.content,
        is_active=persona.is_active,
    )


class ChatHandler:
    """HTTP handlers for chat operations.

    This handler delegates business logic to ChatService
    and handles HTTP-specific concerns like:
    - Converting DTOs to entities and back
    - Mapping QuotaExceededError to 429 with Retry-After
    - Wrapping unexpected errors as 500

    Example:
        ```python
        handler = ChatHandler(chat_service=service, personas=personas)

        @app.post("/chat", response_model=ChatReplyResponse)
        async def chat(request: SendMessageRequest):
            return await handler.send_message(request)
        ```
    """

    def __init__(self, chat_service: ChatService, personas: PersonaCatalog) -> None:
        """Initialize the chat handler.

        Args:
            chat_service: The chat service for business logic (required).
            personas: Persona listing and activation (required).
        """
        self._chat = chat_service
        self._personas = personas

    async def send_message(self, request: SendMessageRequest) -> ChatReplyResponse:
        """Handle POST /chat requests.

        Args:
            request: The send message request DTO

        Returns:
            ChatReplyResponse with the reply text and persona id

        Raises:
            HTTPException: 429 when the quota is exhausted, 500 on unexpected errors
        """
        try:
            reply = await self._chat.send_message(
                request.message,
                [turn.to_entity() for turn in request.history],
            )
        except QuotaExceededError as e:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail={"message": str(e), "minutes_left": e.minutes_left},
                headers={"Retry-After": str(e.minutes_left * 60)},
            ) from e
        except Exception as e:
            logger.exception("Send message error")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send message: {e}",
            ) from e

        return ChatReplyResponse(content=reply.content, persona_id=reply.persona_id)

    async def get_quota(self) -> QuotaStatusResponse:
        """Handle GET /quota requests."""
        snapshot = self._chat.quota.snapshot()
        return QuotaStatusResponse(
            count=snapshot.count,
            capacity=snapshot.capacity,
            remaining=snapshot.remaining,
            window_seconds=snapshot.window_seconds,
            minutes_left=snapshot.minutes_left,
        )

    async def list_personas(self) -> PersonaListResponse:
        """Handle GET /personas requests."""
        personas = await self._personas.list_all()
        return PersonaListResponse(personas=[_persona_item(p) for p in personas])

    async def activate_persona(self, persona_id: str) -> PersonaItem:
        """Handle PUT /personas/{persona_id}/active requests.

        Raises:
            HTTPException: 404 if the persona does not exist
        """
        try:
            persona = await self._personas.activate(persona_id)
        except PersonaNotFoundError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(e),
            ) from e

        logger.info("Activated persona %s", persona.name)
        return _persona_item(persona)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._chat.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )

    async def get_ai_config(self) -> AIConfigResponse:
        """Handle GET /ai-config requests.

        Reports the provider settings the next chat request will use.
        The API key itself is never returned, only whether a real one is set.
        """
        config = self._chat.provider_config()
        return AIConfigResponse(
            base_url=config.base_url,
            model=config.model,
            api_key_set=config.has_credentials,
        )
