"""Audio transcription forwarder (OpenAI Whisper-compatible endpoint)."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from ..config import Settings
from ..errors import ConfigurationError, RemoteServiceError, TransportError
from .assistants import parse_response_body

logger = logging.getLogger(__name__)


class TranscriptionClient:
    """Forwards an audio file to the remote transcription endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str = "whisper-1",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured in the environment")
        self.api_key = api_key
        self.api_url = f"{base_url.rstrip('/')}/audio/transcriptions"
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> TranscriptionClient:
        return cls(
            api_key=settings.openai_api_key or "",
            base_url=settings.api_base_url,
            model=settings.transcribe_model,
            timeout=settings.transcribe_timeout_seconds,
            transport=transport,
        )

    async def transcribe(self, file_path: str | Path, filename: str | None = None) -> str:
        """
        Transcribe an audio file.

        Args:
            file_path: Path to the audio file on disk.
            filename: Name reported to the remote service (defaults to "audio").

        Returns:
            Recognized text, or "" when the response has no text field.
        """
        path = Path(file_path)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                with open(path, "rb") as f:
                    response = await client.post(
                        self.api_url,
                        headers={"Authorization": f"Bearer {self.api_key}"},
                        files={"file": (filename or "audio", f)},
                        data={"model": self.model},
                    )
        except httpx.TransportError as e:
            raise TransportError(f"Failed to transcribe audio: {e}", cause=e) from e

        if not response.is_success:
            logger.error(f"Transcription failed ({response.status_code}): {response.text}")
            raise RemoteServiceError(
                f"Failed to transcribe audio ({response.status_code})",
                status_code=response.status_code,
                body=response.text,
                text=response.text,
            )

        data = parse_response_body(response)
        if isinstance(data, dict):
            return str(data.get("text") or "")
        return ""
