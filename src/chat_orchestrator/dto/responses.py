"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ChatReplyResponse(BaseModel):
    """Response DTO for a chat reply."""

    content: str = Field(..., description="The reply text")
    persona_id: str | None = Field(None, description="Id of the persona that was active")


class PersonaItem(BaseModel):
    """Single persona."""

    id: str = Field(..., description="Persona id")
    name: str = Field(..., description="Display name")
    content: str = Field(..., description="System prompt text")
    is_active: bool = Field(..., description="Whether this persona is active")


class PersonaListResponse(BaseModel):
    """Response DTO for the persona list."""

    personas: list[PersonaItem] = Field(default_factory=list)


class QuotaStatusResponse(BaseModel):
    """Response DTO for the request quota."""

    count: int = Field(..., description="Upstream calls charged in the current window", ge=0)
    capacity: int = Field(..., description="Calls allowed per window", ge=1)
    remaining: int = Field(..., description="Calls left in the current window", ge=0)
    window_seconds: int = Field(..., description="Window length in seconds", ge=1)
    minutes_left: int = Field(..., description="Minutes until the window resets", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the response cache is reachable")


class AIConfigResponse(BaseModel):
    """Response DTO for the provider configuration.

    Serialized with camelCase keys (baseUrl, model, apiKeySet).
    """

    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(..., alias="baseUrl", description="Chat-completions endpoint")
    model: str = Field(..., description="Model id sent upstream")
    api_key_set: bool = Field(..., alias="apiKeySet", description="Whether a real API key is configured")
