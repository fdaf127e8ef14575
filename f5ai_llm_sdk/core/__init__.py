"""Core logic layers for the F5AI SDK.

This package contains the transport-independent logic organized into layers:
- capabilities: Model family rule tables and backend policies
- normalization: Request body and usage normalization
- catalog: Lookup over the static model catalog
"""

from .catalog import get_available_models, get_model_config, is_model_available

__all__ = [
    "get_model_config",
    "get_available_models",
    "is_model_available",
]
