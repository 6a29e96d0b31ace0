"""Chat relay route."""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from ...config import Settings
from ...errors import ConfigurationError, PollTimeoutError, RemoteServiceError
from ...service import run_conversation
from ..deps import get_app_settings, get_transport
from ..responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter()


class ChatResponse(BaseModel):
    """Response body for a completed chat turn."""

    reply: str


async def _read_history(request: Request) -> list:
    """Lenient body parsing: anything but `{"history": [...]}` means no history."""
    try:
        payload = await request.json()
    except ValueError:
        return []

    history = payload.get("history") if isinstance(payload, dict) else None
    return history if isinstance(history, list) else []


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    """Run the assistant over the client's history and return its reply."""
    history = await _read_history(request)

    try:
        reply = await run_conversation(history, settings, transport=transport)
    except ConfigurationError as e:
        logger.error(f"Chat rejected: {e}")
        return error_response(e)
    except RemoteServiceError as e:
        logger.error(f"Assistant service error: {e}")
        return error_response(e)
    except PollTimeoutError as e:
        logger.error(f"Gave up waiting for run: {e}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"Chat processing failed: {e}")
        return error_response(e)

    return ChatResponse(reply=reply)
