"""
Response shapes returned to callers.

``CompletionResponse`` mirrors a non-streamed chat completion and
``SyntheticChunk`` mirrors one element of a streamed one. The backend never
streams, so a chunk is always derived from exactly one full response.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .conversation_types import ChatMessage


class Usage(BaseModel):
    """Token usage counters."""
    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ResponseChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: Optional[ChatMessage] = None
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None


class CompletionResponse(BaseModel):
    """Fully materialized chat completion."""
    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: List[ResponseChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None


class ChoiceDelta(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class ChunkChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None


class SyntheticChunk(BaseModel):
    """A full response repackaged as the single element of a stream."""
    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion.chunk"
    created: int = 0
    model: str = ""
    choices: List[ChunkChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    def get_text(self) -> str:
        """Concatenated delta content of all choices."""
        return "".join(choice.delta.content or "" for choice in self.choices)


class RerankResponse(BaseModel):
    """Rerank result; backend fields are passed through untouched."""
    model_config = ConfigDict(extra="allow")

    data: List[Dict[str, Any]] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
