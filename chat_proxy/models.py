"""Pydantic models shared across application layers."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Incoming `/ask` payload.

    `message` is optional at the schema level so that a missing value is
    reported as a 400 by the handler rather than a schema error.
    """

    message: str | None = Field(default=None, description="User supplied chat message.")


class ChatReply(BaseModel):
    """Successful reply returned to the browser."""

    role: Literal["assistant"] = "assistant"
    content: str


class ErrorReply(BaseModel):
    """Error body returned for any failed request."""

    error: str
    details: str | None = None


class GenerationParameters(BaseModel):
    """Fixed sampling parameters sent with every upstream request."""

    max_length: int = 500
    temperature: float = 0.7


class InferenceRequest(BaseModel):
    """Body of the outbound text-generation call."""

    inputs: str
    parameters: GenerationParameters = Field(default_factory=GenerationParameters)


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"


class VersionResponse(BaseModel):
    version: str
    environment: str
