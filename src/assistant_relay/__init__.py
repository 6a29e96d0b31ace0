"""Backend relay for assistant conversations and audio transcription."""

__version__ = "0.1.0"
