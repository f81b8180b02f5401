from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_orchestrator.api.dependencies import HandlerDep, lifespan
from chat_orchestrator.config import settings
from chat_orchestrator.dto import (
    AIConfigResponse,
    ChatReplyResponse,
    HealthCheckResponse,
    PersonaItem,
    PersonaListResponse,
    QuotaStatusResponse,
    SendMessageRequest,
)

app = FastAPI(
    title="Chat Orchestrator API",
    description="Quota-limited, cached AI chat replies with offline fallback",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Chat Orchestrator API",
        "version": "0.1.0",
        "description": "Quota-limited, cached AI chat replies with offline fallback",
        "endpoints": {
            "chat": "/chat",
            "quota": "/quota",
            "personas": "/personas",
            "ai_config": "/ai-config",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/chat", response_model=ChatReplyResponse)
async def send_message(request: SendMessageRequest, handler: HandlerDep) -> ChatReplyResponse:
    """
    Get an AI reply for a chat message.

    Args:
        request: The message and the conversation history.

    Returns:
        The reply text and the id of the persona that was active.
    """
    return await handler.send_message(request)


@app.get("/quota", response_model=QuotaStatusResponse)
async def get_quota(handler: HandlerDep) -> QuotaStatusResponse:
    """Get the request quota for the current window."""
    return await handler.get_quota()


@app.get("/personas", response_model=PersonaListResponse)
async def list_personas(handler: HandlerDep) -> PersonaListResponse:
    """List all personas."""
    return await handler.list_personas()


@app.put("/personas/{persona_id}/active", response_model=PersonaItem)
async def activate_persona(persona_id: str, handler: HandlerDep) -> PersonaItem:
    """Make a persona the active one."""
    return await handler.activate_persona(persona_id)


@app.get("/ai-config", response_model=AIConfigResponse)
async def get_ai_config(handler: HandlerDep) -> AIConfigResponse:
    """Show which endpoint and model chat requests go to, and whether a key is set."""
    return await handler.get_ai_config()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chat_orchestrator.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
