"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ..config import Settings, get_settings
from .routes import chat, transcribe

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; /api/chat and /api/transcribe will fail")
    if not settings.assistant_id:
        logger.warning("ASSISTANT_ID is not set; /api/chat will fail")

    logger.info("Assistant relay starting...")
    yield
    logger.info("Assistant relay shutdown complete")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    `transport` replaces the network layer of every outbound httpx client.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Assistant Relay",
        description="Relays chat and transcription requests to the OpenAI API",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(transcribe.router, prefix="/api", tags=["transcribe"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Mounted last so it never shadows the API routes
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug(f"Static directory {static_dir} not found, not serving client assets")

    return app


app = create_app()
