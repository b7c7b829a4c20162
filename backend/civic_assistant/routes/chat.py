"""Chat API routes."""
from fastapi import APIRouter

from civic_assistant.schemas.chat import ChatRequest, ChatResponse
from civic_assistant.services.chat import respond

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(body: ChatRequest):
    """Reply to a single chat message. Stateless, no history."""
    return {"reply": respond(body.message)}
