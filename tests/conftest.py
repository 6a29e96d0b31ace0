"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from assistant_relay.config import Settings

BASE_URL = "https://api.openai.test/v1"
THREAD_ID = "thread_abc123"
RUN_ID = "run_def456"


class FakeOpenAI:
    """In-memory stand-in for the Assistants and audio endpoints."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.run_statuses: list[str] = ["completed"]
        self.messages_payload: dict[str, Any] = {
            "object": "list",
            "data": [
                {
                    "id": "msg_2",
                    "role": "assistant",
                    "content": [
                        {"type": "text", "text": {"value": "Hello there [4:0†source]!", "annotations": []}}
                    ],
                },
                {
                    "id": "msg_1",
                    "role": "user",
                    "content": [{"type": "text", "text": {"value": "hi", "annotations": []}}],
                },
            ],
        }
        self.transcription_payload: dict[str, Any] = {"text": "transcribed words"}
        # (method, path) -> httpx.Response to return, or exception to raise
        self.overrides: dict[tuple[str, str], Any] = {}

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def json_body(self, method: str, path: str) -> Any:
        return json.loads(self.calls(method, path)[0].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)

        override = self.overrides.get(key)
        if isinstance(override, Exception):
            raise override
        if override is not None:
            return override

        thread_path = f"/v1/threads/{THREAD_ID}"
        run_path = f"{thread_path}/runs/{RUN_ID}"

        if key == ("POST", "/v1/threads"):
            return httpx.Response(200, json={"id": THREAD_ID, "object": "thread"})
        if key == ("POST", f"{thread_path}/runs"):
            return httpx.Response(200, json={"id": RUN_ID, "object": "thread.run", "status": "queued"})
        if key == ("GET", run_path):
            status = self.run_statuses.pop(0) if len(self.run_statuses) > 1 else self.run_statuses[0]
            return httpx.Response(200, json={"id": RUN_ID, "status": status})
        if key == ("POST", f"{run_path}/cancel"):
            return httpx.Response(200, json={"id": RUN_ID, "status": "cancelling"})
        if key == ("GET", f"{thread_path}/messages"):
            return httpx.Response(200, json=self.messages_payload)
        if key == ("POST", "/v1/audio/transcriptions"):
            return httpx.Response(200, json=self.transcription_payload)

        return httpx.Response(404, json={"error": {"message": f"No route for {key}"}})


@pytest.fixture
def fake_openai():
    """Fake remote service with default happy-path responses."""
    return FakeOpenAI()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings without reading the environment's .env file."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "OPENAI_API_KEY": "sk-test",
            "ASSISTANT_ID": "asst_test",
            "OPENAI_BASE_URL": BASE_URL,
            "RUN_POLL_INTERVAL_SECONDS": 0,
            "RUN_POLL_TIMEOUT_SECONDS": 5,
            "UPLOAD_DIR": str(tmp_path / "uploads"),
            "STATIC_DIR": str(tmp_path / "public"),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()
