"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from chat_orchestrator.entities import ChatTurn, Role


class ChatTurnItem(BaseModel):
    """One turn of the conversation history."""

    role: Role = Field(..., description="Who wrote the turn: USER or ASSISTANT")
    content: str = Field(..., description="The message text")
    persona_id: str | None = Field(None, description="Persona that produced an assistant turn")

    def to_entity(self) -> ChatTurn:
        return ChatTurn(role=self.role, content=self.content, persona_id=self.persona_id)


class SendMessageRequest(BaseModel):
    """Request DTO for sending a chat message.

    The handler will convert this to internal calls to the service layer.
    """

    message: str = Field(..., description="The new user message", min_length=1, max_length=1000)
    history: list[ChatTurnItem] = Field(
        default_factory=list,
        description="Conversation history, oldest first",
    )

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value
