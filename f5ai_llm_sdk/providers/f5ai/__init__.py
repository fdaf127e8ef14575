"""F5AI backend: generic-message provider and OpenAI-shaped API."""

from .adapter import F5AIProvider
from .api import F5AIApi

__all__ = ["F5AIProvider", "F5AIApi"]
