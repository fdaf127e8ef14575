"""
Runtime settings for the F5AI provider.

Settings are a pydantic model so they can be built programmatically,
from a platform config dict, or from environment variables (``.env``
files are honoured through python-dotenv).
"""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    AZURE_API_TYPE,
    DEFAULT_API_BASE,
    DEFAULT_API_VERSION,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MAX_EMBEDDING_BATCH_SIZE,
    DEFAULT_O_SERIES_INSTRUCTIONS,
    DEFAULT_TIMEOUT_SECONDS,
    OFFICIAL_API_BASE,
)
from .model_families import NormalizationRevision

# Environment variable names
ENV_API_BASE = "F5AI_API_BASE"
ENV_API_KEY = "F5AI_API_KEY"
ENV_API_TYPE = "F5AI_API_TYPE"
ENV_DEPLOYMENT = "F5AI_DEPLOYMENT"
ENV_API_VERSION = "F5AI_API_VERSION"
ENV_USE_LEGACY_COMPLETIONS = "F5AI_USE_LEGACY_COMPLETIONS"
ENV_MAX_STOP_WORDS = "F5AI_MAX_STOP_WORDS"
ENV_MAX_EMBEDDING_BATCH_SIZE = "F5AI_MAX_EMBEDDING_BATCH_SIZE"
ENV_EMBEDDING_MODEL = "F5AI_EMBEDDING_MODEL"
ENV_REVISION = "F5AI_NORMALIZATION_REVISION"
ENV_O_SERIES_INSTRUCTIONS = "F5AI_O_SERIES_INSTRUCTIONS"
ENV_TIMEOUT = "F5AI_TIMEOUT"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class F5AIConfig(BaseModel):
    """Connection and normalization settings for one F5AI backend."""
    model_config = ConfigDict(extra="forbid", use_enum_values=False)

    api_base: Optional[str] = Field(DEFAULT_API_BASE, description="API base URL")
    api_key: Optional[str] = Field(None, description="Bearer token")
    api_type: Optional[str] = Field(None, description="API flavour, e.g. 'azure'")
    deployment: Optional[str] = Field(None, description="Azure-style deployment name")
    api_version: str = Field(DEFAULT_API_VERSION, description="Azure-style api-version query parameter")
    use_legacy_completions_endpoint: bool = Field(
        False,
        description="Route chat requests through the legacy completions endpoint"
    )
    max_stop_words: Optional[int] = Field(
        None, ge=0,
        description="Stop-sequence ceiling override; host-based default when unset"
    )
    max_embedding_batch_size: int = Field(DEFAULT_MAX_EMBEDDING_BATCH_SIZE, ge=1)
    embedding_model: str = Field(DEFAULT_EMBEDDING_MODEL)
    revision: NormalizationRevision = Field(
        NormalizationRevision.CURRENT,
        description="Which generation of request rules to apply"
    )
    o_series_instructions: Optional[str] = Field(
        None,
        description="Formatting preamble injected into o-series prompts (legacy revision)"
    )
    timeout: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("api_base")
    def ensure_trailing_slash(cls, v):
        # urljoin drops the last path segment of a base without a trailing slash
        if v and not v.endswith("/"):
            return v + "/"
        return v or None

    @field_validator("api_type")
    def lower_api_type(cls, v):
        return v.lower() if v else None

    @property
    def is_azure(self) -> bool:
        return self.api_type == AZURE_API_TYPE

    @property
    def is_official_endpoint(self) -> bool:
        return self.api_base == OFFICIAL_API_BASE

    @classmethod
    def from_env(cls, **overrides: Any) -> "F5AIConfig":
        """Build settings from ``F5AI_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        if os.getenv(ENV_API_BASE):
            values["api_base"] = os.getenv(ENV_API_BASE)
        if os.getenv(ENV_API_KEY):
            values["api_key"] = os.getenv(ENV_API_KEY)
        if os.getenv(ENV_API_TYPE):
            values["api_type"] = os.getenv(ENV_API_TYPE)
        if os.getenv(ENV_DEPLOYMENT):
            values["deployment"] = os.getenv(ENV_DEPLOYMENT)
        if os.getenv(ENV_API_VERSION):
            values["api_version"] = os.getenv(ENV_API_VERSION)
        if os.getenv(ENV_USE_LEGACY_COMPLETIONS):
            values["use_legacy_completions_endpoint"] = (
                os.getenv(ENV_USE_LEGACY_COMPLETIONS, "").strip().lower() in _TRUE_VALUES
            )
        if os.getenv(ENV_MAX_STOP_WORDS):
            values["max_stop_words"] = int(os.getenv(ENV_MAX_STOP_WORDS))
        if os.getenv(ENV_MAX_EMBEDDING_BATCH_SIZE):
            values["max_embedding_batch_size"] = int(os.getenv(ENV_MAX_EMBEDDING_BATCH_SIZE))
        if os.getenv(ENV_EMBEDDING_MODEL):
            values["embedding_model"] = os.getenv(ENV_EMBEDDING_MODEL)
        if os.getenv(ENV_REVISION):
            values["revision"] = NormalizationRevision(os.getenv(ENV_REVISION).strip().lower())
        if os.getenv(ENV_O_SERIES_INSTRUCTIONS):
            instructions = os.getenv(ENV_O_SERIES_INSTRUCTIONS)
            # "default" selects the historic markdown preamble
            if instructions.strip().lower() == "default":
                instructions = DEFAULT_O_SERIES_INSTRUCTIONS
            values["o_series_instructions"] = instructions
        if os.getenv(ENV_TIMEOUT):
            # Allow overriding default timeout via env variable (seconds)
            try:
                values["timeout"] = float(os.getenv(ENV_TIMEOUT))
            except ValueError:
                pass

        values.update(overrides)
        return cls(**values)
