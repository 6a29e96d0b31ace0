"""Remote service clients."""

from .assistants import AssistantsClient, parse_response_body
from .transcription import TranscriptionClient

__all__ = [
    "AssistantsClient",
    "TranscriptionClient",
    "parse_response_body",
]
