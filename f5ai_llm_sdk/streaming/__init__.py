"""Streaming layer for F5AI responses.

This layer handles:
- Synthetic single-chunk streams over non-streamed responses
- Reshaping chat and FIM responses into chunk form
- Incremental parsing of SSE-framed legacy and FIM responses
"""

from .sse import extract_completion_text, extract_fim_text, iter_sse_events
from .synthetic import SingleChunkStream, chat_completion_to_chunk, fim_response_to_chunk

__all__ = [
    "SingleChunkStream",
    "chat_completion_to_chunk",
    "fim_response_to_chunk",
    "iter_sse_events",
    "extract_completion_text",
    "extract_fim_text",
]
