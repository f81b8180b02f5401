"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - One QuotaTracker per process, shared by every request
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from chat_orchestrator.config import configure_logging, settings
from chat_orchestrator.handlers import ChatHandler
from chat_orchestrator.repositories import (
    InMemoryPersonaRepository,
    InMemoryResponseRepository,
    OpenAIChatProvider,
    RedisResponseRepository,
)
from chat_orchestrator.services import ChatService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ChatHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "chat_handler", None)
    if handler is None:
        raise RuntimeError("ChatHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (response store, personas, provider)
    2. Service (business logic) - stored in app.state.chat_service
    3. Handler (HTTP endpoints) - stored in app.state.chat_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    configure_logging()

    redis_repository: RedisResponseRepository | None = None
    if settings.uses_redis:
        redis_repository = RedisResponseRepository.create()
        response_store = redis_repository
    else:
        response_store = InMemoryResponseRepository()

    personas = InMemoryPersonaRepository.create()
    provider = OpenAIChatProvider.create()
    chat_service = ChatService.create(
        persona_source=personas,
        response_store=response_store,
        provider=provider,
    )

    app.state.chat_service = chat_service
    app.state.chat_handler = ChatHandler(chat_service=chat_service, personas=personas)

    logger.info("✓ Chat service initialized (cache backend: %s)", settings.cache_backend)
    logger.info("✓ Quota: %d requests per %ds", settings.quota_capacity, settings.quota_window_seconds)
    logger.info("✓ Cache healthy: %s", await chat_service.is_healthy())

    yield

    await provider.close()
    if redis_repository is not None:
        await redis_repository.close()

    del app.state.chat_handler
    del app.state.chat_service
    logger.info("✓ Chat service shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[ChatHandler, Depends(get_handler)]
