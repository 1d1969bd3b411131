"""Request and response models for the chat endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request model for both chat endpoints."""

    message: str


class StartChatResponse(BaseModel):
    """Response model for starting a new conversation."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str = Field(..., alias="threadId")
    response: str


class ChatResponse(BaseModel):
    """Response model for continuing an existing conversation."""

    response: str


class ErrorResponse(BaseModel):
    """Body returned with any 500 from the chat endpoints."""

    error: str


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str
