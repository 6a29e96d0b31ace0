"""Reply extraction and cleanup for thread message payloads.

The messages endpoint has emitted more than one content schema over time, so
each content item is classified into a known variant before its text is read.
Anything that matches no variant degrades to the placeholder instead of
raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

NO_REPLY = "(no reply)"

# Footnote-style source annotations, e.g. "[4:0†source]"; ASCII digits only
CITATION_MARKER_RE = re.compile(r"\[\d+:\d+†[^\]]+\]", re.ASCII)
WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class OutputText:
    """`{"type": "output_text", "text": {"value": "..."}}`"""

    value: str


@dataclass(frozen=True)
class PlainText:
    """`{"type": "text", "text": "..."}`"""

    value: str


@dataclass(frozen=True)
class NestedText:
    """Any other item carrying `{"text": {"value": "..."}}`."""

    value: str


@dataclass(frozen=True)
class Unrecognized:
    """Content item with no readable text."""

    raw: Any = None


ContentItem = Union[OutputText, PlainText, NestedText, Unrecognized]


def _nested_value(text: Any) -> str | None:
    if isinstance(text, dict) and isinstance(text.get("value"), str):
        return text["value"]
    return None


def classify_content_item(item: Any) -> ContentItem:
    """Map one raw content item onto the known variants, in priority order."""
    if not isinstance(item, dict):
        return Unrecognized(item)

    item_type = item.get("type")
    text = item.get("text")
    nested = _nested_value(text)

    if item_type == "output_text" and nested is not None:
        return OutputText(nested)
    if item_type == "text" and isinstance(text, str):
        return PlainText(text)
    if nested is not None:
        return NestedText(nested)
    return Unrecognized(item)


def extract_reply(payload: Any) -> str:
    """
    Return the text of the most recent message in a thread messages payload.

    Only `data[0]` is consulted; the API lists messages newest first.
    Never raises and never returns an empty string.
    """
    if not isinstance(payload, dict):
        return NO_REPLY

    messages = payload.get("data")
    if not isinstance(messages, list) or not messages:
        return NO_REPLY

    latest = messages[0]
    if not isinstance(latest, dict):
        return NO_REPLY

    content = latest.get("content")
    if not isinstance(content, (list, tuple)):
        return NO_REPLY

    for item in content:
        variant = classify_content_item(item)
        if isinstance(variant, Unrecognized):
            continue
        return variant.value or NO_REPLY

    return NO_REPLY


def sanitize_reply(text: str | None) -> str:
    """Strip citation markers, then collapse whitespace."""
    if not text:
        return ""

    # Removing an inner marker can expose an outer one
    count = 1
    while count:
        text, count = CITATION_MARKER_RE.subn("", text)

    return WHITESPACE_RE.sub(" ", text).strip()
