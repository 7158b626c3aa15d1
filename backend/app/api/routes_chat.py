# app/api/routes_chat.py
# AI chat proxy: POST /api/ai-chat {message, history?} -> {success, answer}

from __future__ import annotations
import logging
from typing import Optional

from fastapi import APIRouter

from app.core.errors import AppError, UnknownError
from app.db.models.schemas import ChatIn, ChatOut, ErrorOut
from app.services import chat_openai

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

@router.post("/ai-chat", response_model=ChatOut, responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}})
async def ai_chat(payload: Optional[ChatIn] = None):
    # empty body behaves like {}
    payload = payload or ChatIn()
    try:
        answer = await chat_openai.ask(payload.message, payload.history)
    except AppError:
        raise
    except Exception:
        log.exception("AI chat error")
        raise UnknownError("AI chat failed")
    return ChatOut(answer=answer)
