"""API routes."""

from . import chat, transcribe

__all__ = ["chat", "transcribe"]
