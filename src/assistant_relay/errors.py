"""Error kinds raised by the relay core and its remote clients."""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """A required setting (credential or assistant id) is missing."""


class RemoteServiceError(Exception):
    """The remote service answered with a non-success status."""

    def __init__(self, message: str, status_code: int, body: Any = None, text: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.text = text


class TransportError(Exception):
    """Network-level failure while talking to the remote service."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class PollTimeoutError(Exception):
    """A run did not reach a terminal status before the polling deadline."""

    def __init__(self, thread_id: str, run_id: str, last_status: str, waited_seconds: float):
        super().__init__(
            f"Run {run_id} on thread {thread_id} still '{last_status}' after {waited_seconds:.0f}s"
        )
        self.thread_id = thread_id
        self.run_id = run_id
        self.last_status = last_status
        self.waited_seconds = waited_seconds
