"""
Provider Adapters Layer

This layer contains the F5AI backend implementation. The provider adapter
translates between the SDK's generic message interface and the backend's
OpenAI-compatible API; ``F5AIApi`` exposes the OpenAI-shaped surface directly.
"""

from .base import ProviderAdapter, ProviderError
from .errors import ConfigurationError, TransportError
from .f5ai import F5AIApi, F5AIProvider

__all__ = [
    "ProviderAdapter",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "F5AIProvider",
    "F5AIApi",
]
