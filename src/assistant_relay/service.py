"""Conversation run orchestration against the Assistants API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config import Settings
from .errors import ConfigurationError, PollTimeoutError, RemoteServiceError
from .providers.assistants import AssistantsClient
from .replies import extract_reply, sanitize_reply

logger = logging.getLogger(__name__)

FORWARDED_ROLES = frozenset({"user", "assistant"})
NON_TERMINAL_RUN_STATUSES = frozenset({"queued", "in_progress"})


def is_pending(status: Any) -> bool:
    """Only a queued/in_progress string keeps a run pending; anything else is terminal."""
    return isinstance(status, str) and status in NON_TERMINAL_RUN_STATUSES


@dataclass(frozen=True)
class Message:
    """A history entry the thread endpoint accepts."""

    role: str
    content: Any

    def to_payload(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


def filter_history(history: Any) -> list[Message]:
    """Keep only user/assistant entries, in their original order."""
    if not isinstance(history, list):
        return []

    messages: list[Message] = []
    for entry in history:
        if isinstance(entry, dict) and entry.get("role") in FORWARDED_ROLES:
            messages.append(Message(role=entry["role"], content=entry.get("content")))
    return messages


def _require_settings(settings: Settings) -> None:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is not configured in the environment")
    if not settings.assistant_id:
        raise ConfigurationError("ASSISTANT_ID is not configured in the environment")


async def wait_for_run(
    client: AssistantsClient,
    thread_id: str,
    run_id: str,
    status: Any,
    *,
    poll_interval: float,
    timeout: float,
) -> Any:
    """
    Poll a run until it leaves queued/in_progress.

    Args:
        client: Open Assistants client
        thread_id: Thread the run belongs to
        run_id: The run to watch
        status: Status reported when the run was created
        poll_interval: Seconds to sleep before each status check
        timeout: Overall deadline in seconds

    Returns:
        The terminal status, whatever it is (completed, failed, expired, ...)

    Raises:
        PollTimeoutError: If the deadline passes first
        TransportError: If a status check fails at the network level
    """
    loop = asyncio.get_running_loop()
    started = loop.time()

    while is_pending(status):
        waited = loop.time() - started
        if waited >= timeout:
            raise PollTimeoutError(thread_id, run_id, status, waited)

        await asyncio.sleep(min(poll_interval, timeout - waited))

        try:
            run = await client.get_run(thread_id, run_id)
        except RemoteServiceError as e:
            logger.warning(f"Status check for run {run_id} failed, keeping '{status}': {e}")
            continue

        status = run.get("status") or status
        logger.debug(f"Run {run_id} status: {status}")

    return status


async def _cancel_quietly(client: AssistantsClient, thread_id: str, run_id: str) -> None:
    try:
        await client.cancel_run(thread_id, run_id)
        logger.info(f"Cancelled timed-out run {run_id}")
    except Exception as e:
        logger.warning(f"Failed to cancel timed-out run {run_id}: {e}")


async def run_conversation(
    history: Any,
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Turn a client message history into the assistant's reply.

    Creates a thread from the history, starts a run, polls it to a terminal
    status and returns the cleaned text of the newest thread message. The
    messages are fetched for every terminal status, not only `completed`.
    """
    _require_settings(settings)
    messages = filter_history(history)

    async with AssistantsClient.from_settings(settings, transport=transport) as client:
        thread = await client.create_thread([m.to_payload() for m in messages])
        thread_id = _require_id(thread, "thread")
        logger.info(f"Thread created: {thread_id} ({len(messages)} messages)")

        run = await client.create_run(thread_id, settings.assistant_id)
        run_id = _require_id(run, "run")
        logger.info(f"Run started: {run_id}")

        try:
            status = await wait_for_run(
                client,
                thread_id,
                run_id,
                run.get("status") or "queued",
                poll_interval=settings.run_poll_interval_seconds,
                timeout=settings.run_poll_timeout_seconds,
            )
        except PollTimeoutError:
            await _cancel_quietly(client, thread_id, run_id)
            raise

        if status != "completed":
            logger.warning(f"Run {run_id} ended with status '{status}', reading thread anyway")
        else:
            logger.info(f"Run {run_id} completed")

        payload = await client.list_messages(thread_id)

    reply = sanitize_reply(extract_reply(payload))
    logger.info(f"Reply ready for thread {thread_id}: {len(reply)} chars")
    return reply


def _require_id(resource: dict[str, Any], kind: str) -> str:
    resource_id = resource.get("id")
    if not isinstance(resource_id, str) or not resource_id:
        raise RemoteServiceError(
            f"Assistant service returned a {kind} without an id",
            status_code=502,
            body={"error": f"Assistant service returned a {kind} without an id"},
        )
    return resource_id
