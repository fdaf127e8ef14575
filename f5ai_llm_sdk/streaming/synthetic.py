"""
Synthetic streaming over non-streamed responses.

The F5AI backend never streams, but callers may ask for a streaming-shaped
result. ``SingleChunkStream`` makes the always-one-chunk contract explicit:
it performs its request lazily on first iteration, yields exactly one item,
and is exhausted afterwards.
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from ..config.constants import DEFAULT_FINISH_REASON
from ..models.responses import ChoiceDelta, ChunkChoice, SyntheticChunk, Usage

T = TypeVar("T")


class SingleChunkStream(Generic[T]):
    """Async iterator that yields exactly one item produced by ``producer``.

    Not restartable: iterating again after exhaustion yields nothing, and
    every new stream performs a fresh round trip.
    """

    def __init__(self, producer: Callable[[], Awaitable[T]]):
        self._producer = producer
        self._done = False

    def __aiter__(self) -> "SingleChunkStream[T]":
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        self._done = True
        return await self._producer()

    async def collect(self) -> T:
        """Await the single item directly."""
        if self._done:
            raise RuntimeError("SingleChunkStream already consumed")
        return await self.__anext__()


def _as_dict(obj: Any) -> Dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return obj
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return dict(getattr(obj, "__dict__", {}))


def chat_completion_to_chunk(response: Any) -> SyntheticChunk:
    """Repackage a full chat completion as one streaming chunk.

    ``message`` becomes ``delta``; role, content and tool calls are copied
    verbatim. Tool calls gain the ``index`` field chunk consumers expect.
    """
    data = _as_dict(response)
    choices = []
    for position, choice in enumerate(data.get("choices") or []):
        choice = _as_dict(choice)
        message = _as_dict(choice.get("message"))
        tool_calls = message.get("tool_calls")
        if tool_calls:
            tool_calls = [
                {"index": i, **_as_dict(call)} for i, call in enumerate(tool_calls)
            ]
        choices.append(ChunkChoice(
            index=choice.get("index", position),
            delta=ChoiceDelta(
                role=message.get("role"),
                content=message.get("content"),
                tool_calls=tool_calls or None,
            ),
            logprobs=choice.get("logprobs"),
            finish_reason=choice.get("finish_reason"),
        ))

    usage = data.get("usage")
    return SyntheticChunk(
        id=data.get("id") or "",
        created=data.get("created") or int(time.time()),
        model=data.get("model") or "",
        choices=choices,
        usage=Usage.model_validate(_as_dict(usage)) if usage else None,
    )


def fim_response_to_chunk(data: Dict[str, Any], model: Optional[str] = None) -> SyntheticChunk:
    """Repackage a fill-in-the-middle response as one streaming chunk.

    Each choice's ``text`` (or ``message.content``) becomes ``delta.content``;
    a missing finish reason defaults to "stop".
    """
    choices = []
    for index, choice in enumerate(data.get("choices") or []):
        content = choice.get("text")
        if content is None:
            content = (choice.get("message") or {}).get("content")
        choices.append(ChunkChoice(
            index=index,
            delta=ChoiceDelta(content=content),
            finish_reason=choice.get("finish_reason") or DEFAULT_FINISH_REASON,
        ))

    return SyntheticChunk(
        id=data.get("id") or "",
        created=data.get("created") or int(time.time()),
        model=data.get("model") or model or "",
        choices=choices,
    )
