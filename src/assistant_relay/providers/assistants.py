"""OpenAI Assistants API (v2) client for threads, runs and messages."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..errors import ConfigurationError, RemoteServiceError, TransportError

logger = logging.getLogger(__name__)

ASSISTANTS_BETA_HEADER = "assistants=v2"


def parse_response_body(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class AssistantsClient:
    """
    Thin async client over the thread/run/message endpoints.

    Use as an async context manager; one instance (and one connection pool)
    serves a single conversation run.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured in the environment")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AssistantsClient:
        return cls(
            api_key=settings.openai_api_key or "",
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> AssistantsClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "OpenAI-Beta": ASSISTANTS_BETA_HEADER,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if self._client is None:
            raise RuntimeError("AssistantsClient must be used as an async context manager")

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TransportError as e:
            raise TransportError(f"Failed to {action}: {e}", cause=e) from e

        body = parse_response_body(response)
        if not response.is_success:
            raise RemoteServiceError(
                f"Failed to {action} ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=body,
                text=response.text,
            )
        if not isinstance(body, dict):
            raise RemoteServiceError(
                f"Failed to {action}: unexpected response body",
                status_code=502,
                body={"error": f"Unexpected response from assistant service while trying to {action}"},
                text=response.text,
            )
        return body

    async def create_thread(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        """Create a thread seeded with the given `{role, content}` messages."""
        return await self._request("POST", "/threads", "create thread", json={"messages": messages})

    async def create_run(self, thread_id: str, assistant_id: str) -> dict[str, Any]:
        """Start a run of `assistant_id` on a thread."""
        return await self._request(
            "POST",
            f"/threads/{thread_id}/runs",
            "create run",
            json={"assistant_id": assistant_id},
        )

    async def get_run(self, thread_id: str, run_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/threads/{thread_id}/runs/{run_id}", "get run")

    async def cancel_run(self, thread_id: str, run_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/threads/{thread_id}/runs/{run_id}/cancel", "cancel run")

    async def list_messages(self, thread_id: str) -> dict[str, Any]:
        """List thread messages, newest first."""
        return await self._request("GET", f"/threads/{thread_id}/messages", "list messages")
