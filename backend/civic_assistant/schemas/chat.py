"""Chat request/response schemas."""
from typing import Any
from civic_assistant.schemas.base import CamelModel


class ChatRequest(CamelModel):
    # Type is checked by the chat service so that bad input maps to InvalidInputError
    message: Any = None


class ChatResponse(CamelModel):
    reply: str
