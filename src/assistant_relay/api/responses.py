"""Mapping from relay errors to JSON responses."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from ..errors import PollTimeoutError, RemoteServiceError


def error_response(exc: Exception, *, forward_body: bool = True) -> JSONResponse:
    """
    Build the `{error: ...}` response for a failed relay call.

    With `forward_body`, a remote JSON body is returned verbatim under the
    remote status; otherwise the raw remote text goes into `error`.
    Configuration, transport and unexpected errors become a 500.
    """
    if isinstance(exc, RemoteServiceError):
        if forward_body and isinstance(exc.body, (dict, list)):
            return JSONResponse(status_code=exc.status_code, content=exc.body)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.text or str(exc)})

    if isinstance(exc, PollTimeoutError):
        return JSONResponse(status_code=504, content={"error": str(exc)})

    return JSONResponse(status_code=500, content={"error": str(exc)})
