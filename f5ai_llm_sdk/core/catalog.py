from typing import Dict

from ..config.models import MODEL_CONFIGS as RAW_MODEL_CONFIGS, DEFAULT_MODEL
from ..models.generation import ModelConfig


# Convert raw configs to Pydantic models
MODEL_CONFIGS: Dict[str, ModelConfig] = {
    k: ModelConfig(**v) for k, v in RAW_MODEL_CONFIGS.items()
}


def get_model_config(llm_model_id: str) -> ModelConfig:
    """Get catalog entry for a specific model.

    Handles both model IDs (e.g., 'o1-mini') and display names (e.g., 'o1 Mini').
    Unknown models fall back to the default model's entry.
    """
    if llm_model_id in MODEL_CONFIGS:
        return MODEL_CONFIGS[llm_model_id]

    for config in MODEL_CONFIGS.values():
        if config.display_name == llm_model_id or config.name == llm_model_id:
            return config

    return MODEL_CONFIGS[DEFAULT_MODEL]


def get_available_models() -> Dict[str, ModelConfig]:
    """Get all catalog models that are enabled."""
    return {k: v for k, v in MODEL_CONFIGS.items() if v.enabled}


def is_model_available(llm_model_id: str) -> bool:
    """Check if a model is in the catalog and enabled."""
    config = MODEL_CONFIGS.get(llm_model_id)
    return config is not None and config.enabled
