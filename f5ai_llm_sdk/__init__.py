"""
F5AI LLM SDK - OpenAI-compatible provider adapter for the F5AI backend.

This package rewrites generic completion requests into the exact shape the
F5AI gateway accepts and reshapes its responses back:
- Model-family normalization (token field, system role, stop words, prediction)
- Two captured request revisions (legacy and current) as rule tables
- Synthetic single-chunk streaming over a non-streaming backend
- Chat, legacy completions, FIM, embeddings, rerank and model listing
"""

__version__ = "0.1.0"

from .config import DEFAULT_MODEL, F5AIConfig, ModelFamily, NormalizationRevision, classify_model
from .core import get_available_models, get_model_config, is_model_available
from .core.normalization import RequestNormalizer
from .models.conversation_types import ChatMessage, Tool, ToolFunction
from .models.conversation_types import TurnRole as ConversationRole
from .models.generation import CompletionOptions, FimRequest, ModelConfig, RerankRequest
from .models.responses import CompletionResponse, RerankResponse, SyntheticChunk
from .providers import (
    ConfigurationError,
    F5AIApi,
    F5AIProvider,
    ProviderAdapter,
    ProviderError,
    TransportError,
)
from .streaming import SingleChunkStream

__all__ = [
    # Entry points
    "F5AIProvider",
    "F5AIApi",
    "ProviderAdapter",

    # Configuration
    "F5AIConfig",
    "ModelFamily",
    "NormalizationRevision",
    "classify_model",
    "DEFAULT_MODEL",

    # Normalization
    "RequestNormalizer",
    "SingleChunkStream",

    # Catalog
    "get_model_config",
    "get_available_models",
    "is_model_available",

    # Models
    "ChatMessage",
    "ConversationRole",
    "Tool",
    "ToolFunction",
    "CompletionOptions",
    "FimRequest",
    "RerankRequest",
    "ModelConfig",
    "CompletionResponse",
    "RerankResponse",
    "SyntheticChunk",

    # Errors
    "ProviderError",
    "ConfigurationError",
    "TransportError",
]
