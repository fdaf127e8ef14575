from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.model_families import ModelFamily
from .conversation_types import Tool


class CompletionOptions(BaseModel):
    """
    Generic completion options supplied by the calling platform.

    These are translated into an OpenAI chat body by the request normalizer,
    which then applies model-family specific rewrites.
    """
    model_config = ConfigDict(extra="allow")

    # Core parameters
    model: str = Field(..., description="Model identifier")
    max_tokens: Optional[int] = Field(None, ge=1, description="Maximum tokens to generate")
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0, description="Frequency penalty")
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0, description="Presence penalty")
    stop: Optional[List[str]] = Field(None, description="Stop sequences")

    # Tool calling
    tools: Optional[List[Tool]] = Field(None, description="Tool definitions")
    tool_choice: Optional[Any] = Field(None, description="Tool choice directive")

    # Transport shape requested by the caller; never honoured on the wire
    stream: bool = Field(True, description="Caller asked for incremental delivery")

    # Speculative decoding hint (gpt-4o family only)
    prediction: Optional[Dict[str, Any]] = Field(None, description="Predicted output content")

    # Send the last message as a raw prompt to the legacy completions endpoint
    raw: bool = Field(False, description="Raw prompt mode")


class FimRequest(BaseModel):
    """Fill-in-the-middle request body."""
    model_config = ConfigDict(extra="allow")

    model: str
    prompt: str
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: Optional[List[str]] = None


class RerankRequest(BaseModel):
    """Rerank request body; forwarded to the backend unchanged."""
    model_config = ConfigDict(extra="allow")

    model: str
    query: str
    documents: List[str]
    top_n: Optional[int] = None


class ModelConfig(BaseModel):
    """Model catalog entry."""
    name: str
    display_name: str
    family: ModelFamily
    llm_model_id: str
    description: str = ""
    enabled: bool = True
    context_length: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    recommended_for: List[str] = Field(default_factory=list)
