from __future__ import annotations

import json
from typing import Any, AsyncGenerator, Dict, Optional

import httpx

from ..config.constants import LEGACY_END_OF_STREAM_MARKER

SSE_DONE = "[DONE]"


def is_event_stream(response: httpx.Response) -> bool:
    return "text/event-stream" in response.headers.get("content-type", "")


async def iter_sse_events(response: httpx.Response) -> AsyncGenerator[Dict[str, Any], None]:
    """Yield decoded JSON events from a response.

    ``text/event-stream`` bodies are parsed incrementally from their
    ``data:`` lines until ``[DONE]``; any other body is one JSON object.
    """
    if not is_event_stream(response):
        await response.aread()
        yield response.json()
        return

    async for line in response.aiter_lines():
        line = line.strip()
        if not line.startswith("data:"):
            continue
        payload = line[len("data:"):].strip()
        if not payload:
            continue
        if payload == SSE_DONE:
            break
        yield json.loads(payload)


def extract_completion_text(event: Dict[str, Any]) -> Optional[str]:
    """Text fragment of a legacy completion event, or None to skip it.

    Events marked with the end-of-stream sentinel finish reason carry no
    usable text.
    """
    choices = event.get("choices") or []
    if not choices:
        return None
    choice = choices[0]
    if LEGACY_END_OF_STREAM_MARKER in (event.get("finish_reason"), choice.get("finish_reason")):
        return None
    return choice.get("text") or None


def extract_fim_text(event: Dict[str, Any]) -> Optional[str]:
    """Text fragment of a FIM event: delta content, text, or message content."""
    choices = event.get("choices") or []
    if not choices:
        return None
    choice = choices[0]
    delta = choice.get("delta") or {}
    if delta.get("content"):
        return delta["content"]
    if choice.get("text"):
        return choice["text"]
    return (choice.get("message") or {}).get("content") or None
