"""FastAPI routes for the AI Study Companion."""

from fastapi import APIRouter
from pydantic import BaseModel

from companion import get_chat_service

router = APIRouter(prefix="/companion", tags=["companion"])


class CompanionStatusResponse(BaseModel):
    available: bool
    model: str | None = None


@router.get("/status", response_model=CompanionStatusResponse)
async def companion_status() -> CompanionStatusResponse:
    """Report whether the AI Study Companion can be used."""
    chat = get_chat_service()
    if chat is None:
        return CompanionStatusResponse(available=False)
    return CompanionStatusResponse(available=True, model=chat.model_name)
