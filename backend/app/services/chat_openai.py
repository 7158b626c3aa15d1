# app/services/chat_openai.py
# AI chat proxy (OpenAI Chat Completions)
# - fixed site system prompt + last 6 history turns + user message (2000 chars max)
# - no retries: missing key and upstream failures go straight back to the caller

from __future__ import annotations
import logging
import os
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import ConfigurationError, UpstreamError

log = logging.getLogger(__name__)

MAX_MESSAGE_CHARS = 2000
MAX_HISTORY = 6
TEMPERATURE = 0.3
MAX_TOKENS = 400
FALLBACK_ANSWER = "Sorry, I couldn't generate a response."

SYSTEM_PROMPT = (
    "You are the helpful AI assistant for the NSS IIIT-Naya Raipur website.\n"
    "Answer concisely and accurately about: slideshow uploads (category 'gallery'), "
    "header logo uploads (category 'logo'), photo gallery categories "
    "(education, health, environment, community), admin login/upload/delete flow, "
    "events/initiatives/about/contact sections.\n"
    "If the user asks for steps, give short, numbered steps. If you don't know, say so."
)


def _api_key() -> str | None:
    return getattr(settings, "OPENAI_API_KEY", None) or os.getenv("OPENAI_API_KEY")


def _client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key, max_retries=0)


def build_messages(message: Any, history: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    text = "" if message is None else str(message)
    recent = list(history or [])[-MAX_HISTORY:]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        *recent,
        {"role": "user", "content": text[:MAX_MESSAGE_CHARS]},
    ]


async def ask(message: Any, history: Optional[List[Dict[str, Any]]] = None) -> str:
    """
    Forward one question and return the first answer text.
    Raises ConfigurationError (no key) or UpstreamError (API failure).
    """
    api_key = _api_key()
    if not api_key:
        raise ConfigurationError("Server missing OPENAI_API_KEY")

    try:
        # one client per call, closed with its connection pool on exit
        async with _client(api_key) as client:
            chat = await client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=build_messages(message, history),
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
    except openai.APIStatusError as e:
        log.warning("OpenAI returned %s", e.status_code)
        raise UpstreamError("OpenAI error", details=e.response.text)
    except openai.APIError as e:
        # connection errors/timeouts have no response body
        log.warning("OpenAI request failed: %s", e)
        raise UpstreamError("OpenAI error", details=str(e))

    text = chat.choices[0].message.content if chat and chat.choices else ""
    if not text:
        log.info("OpenAI returned an empty answer")
        return FALLBACK_ANSWER
    return text
