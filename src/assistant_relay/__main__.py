"""Run the relay under uvicorn: `python -m assistant_relay`."""

from __future__ import annotations

import logging
import sys

import uvicorn

from .config import Settings, get_settings

logger = logging.getLogger("assistant_relay")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Log the relay at DEBUG when `DEBUG` is set; keep httpx request lines at WARNING."""
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("assistant_relay").setLevel(logging.DEBUG if debug else logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_logging(settings.debug)

    logger.info(
        f"Relaying to {settings.api_base_url} on http://{settings.app_host}:{settings.app_port} "
        f"(transcription model {settings.transcribe_model})"
    )

    uvicorn.run(
        "assistant_relay.api.app:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
