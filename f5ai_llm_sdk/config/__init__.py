"""Configuration module for the F5AI SDK."""

from .models import MODEL_CONFIGS, DEFAULT_MODEL
from .model_families import ModelFamily, NormalizationRevision, classify_model
from .settings import F5AIConfig

# Import all constants
from .constants import *

__all__ = [
    "MODEL_CONFIGS",
    "DEFAULT_MODEL",
    "ModelFamily",
    "NormalizationRevision",
    "classify_model",
    "F5AIConfig",
]
