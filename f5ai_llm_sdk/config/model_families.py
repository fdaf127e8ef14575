# Model family classification and base catalog configurations
from enum import Enum
from typing import Any, Dict

from .constants import NON_CHAT_MODELS


class ModelFamily(str, Enum):
    """Closed set of model families with distinct request-shape rules."""
    O_SERIES = "o-series"
    GPT = "gpt"
    LEGACY_COMPLETION = "legacy-completion"
    EMBEDDING = "embedding"
    OTHER = "other"


def classify_model(model: str) -> ModelFamily:
    """Map a model identifier to its family using prefix checks.

    Order matters: the explicit legacy list is consulted before prefixes
    so that bare names like ``ada`` never fall through to OTHER.
    """
    if not model:
        return ModelFamily.OTHER
    if model in NON_CHAT_MODELS:
        return ModelFamily.LEGACY_COMPLETION
    if model.startswith("text-embedding"):
        return ModelFamily.EMBEDDING
    if model.startswith("gpt"):
        return ModelFamily.GPT
    # o1, o3, o4 and the bare "o" family
    if model.startswith("o"):
        return ModelFamily.O_SERIES
    return ModelFamily.OTHER


class NormalizationRevision(str, Enum):
    """Captured generations of the F5AI request rules.

    The two generations disagree on system-role handling for gpt models,
    on the parallel-tool-call exemption for o1/o3/o4, and on whether token
    limits go on the wire as numbers or strings. A deployment picks one.
    """
    LEGACY = "legacy"
    CURRENT = "current"


# Base catalog configurations for model families
MODEL_FAMILIES = {
    ModelFamily.GPT: {
        "family": ModelFamily.GPT,
        "enabled": True,
        "recommended_for": ["chat"],
    },
    ModelFamily.O_SERIES: {
        "family": ModelFamily.O_SERIES,
        "enabled": True,
        "recommended_for": ["chat"],
    },
    ModelFamily.EMBEDDING: {
        "family": ModelFamily.EMBEDDING,
        "enabled": True,
        "recommended_for": [],
    },
}


def create_model_config(family: ModelFamily, variant: str, overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Create a model configuration by combining family defaults with variant overrides."""
    if family not in MODEL_FAMILIES:
        raise ValueError(f"Unknown model family: {family}")

    base = MODEL_FAMILIES[family].copy()
    base.update(overrides)

    # Ensure required fields
    if "name" not in base:
        base["name"] = variant
    if "display_name" not in base:
        base["display_name"] = variant.replace("-", " ").title()
    if "llm_model_id" not in base:
        base["llm_model_id"] = variant

    return base
