"""Audio transcription relay route."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.datastructures import UploadFile

from ...config import Settings
from ...errors import ConfigurationError, RemoteServiceError
from ...providers.transcription import TranscriptionClient
from ..deps import get_app_settings, get_transport
from ..responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter()


class TranscriptionResponse(BaseModel):
    """Response body for a transcription."""

    text: str


def _save_upload(audio: UploadFile, upload_dir: str) -> str:
    """Copy the upload into `upload_dir` and return the temp file path."""
    Path(upload_dir).mkdir(parents=True, exist_ok=True)
    suffix = os.path.splitext(audio.filename or "")[1]
    with tempfile.NamedTemporaryFile(delete=False, dir=upload_dir, suffix=suffix) as tmp:
        shutil.copyfileobj(audio.file, tmp)
        return tmp.name


def _discard_upload(temp_path: str | None) -> None:
    if not temp_path:
        return
    try:
        os.unlink(temp_path)
    except OSError as e:
        logger.warning(f"Failed to delete temporary upload {temp_path}: {e}")


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    """Forward the `audio` file of a multipart form for transcription."""
    # Parsed by hand so a text value under `audio` is a 400, not a validation error
    form = await request.form()
    audio = form.get("audio")
    if not isinstance(audio, UploadFile):
        return JSONResponse(status_code=400, content={"error": "Audio file was not sent"})

    temp_path: str | None = None
    try:
        client = TranscriptionClient.from_settings(settings, transport=transport)
        temp_path = _save_upload(audio, settings.upload_dir)
        text = await client.transcribe(temp_path, filename=audio.filename or "audio")
    except ConfigurationError as e:
        logger.error(f"Transcription rejected: {e}")
        return error_response(e)
    except RemoteServiceError as e:
        return error_response(e, forward_body=False)
    except Exception as e:
        logger.exception(f"Transcription failed: {e}")
        return error_response(e)
    finally:
        await audio.close()
        _discard_upload(temp_path)

    logger.info(f"Transcribed {audio.filename or 'audio'}: {len(text)} chars")
    return TranscriptionResponse(text=text)
