"""Data models for the F5AI SDK."""

from .generation import (
    CompletionOptions,
    FimRequest,
    RerankRequest,
    ModelConfig
)
from .conversation_types import (
    ChatMessage,
    Tool,
    ToolFunction,
    TurnRole,
    render_chat_message
)
from .responses import (
    ChoiceDelta,
    ChunkChoice,
    CompletionResponse,
    RerankResponse,
    ResponseChoice,
    SyntheticChunk,
    Usage
)

__all__ = [
    # Request models
    "CompletionOptions",
    "FimRequest",
    "RerankRequest",
    "ModelConfig",

    # Conversation models
    "ChatMessage",
    "Tool",
    "ToolFunction",
    "TurnRole",
    "render_chat_message",

    # Response models
    "ChoiceDelta",
    "ChunkChoice",
    "CompletionResponse",
    "RerankResponse",
    "ResponseChoice",
    "SyntheticChunk",
    "Usage"
]
