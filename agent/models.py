from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    role: Role = Field(..., description="'user' or 'assistant'")
    content: str


class ChatTurn(ChatMessage):
    """One message of a session transcript. Never mutated once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique within the session")

    def to_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class AgentRequest(BaseModel):
    messages: Optional[List[ChatMessage]] = Field(
        default_factory=list,
        description="Full transcript, oldest first (frontend-managed)",
    )


class AgentReply(BaseModel):
    text: str


class AgentError(BaseModel):
    error: str
