"""Request-scoped dependencies."""

from __future__ import annotations

import httpx
from fastapi import Request

from ..config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings built once at startup."""
    return request.app.state.settings


def get_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    return getattr(request.app.state, "transport", None)
