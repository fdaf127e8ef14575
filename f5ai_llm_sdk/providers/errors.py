"""
Provider error types.

Only two failures are raised by this package itself; everything else
(httpx status and network errors, openai SDK errors, JSON decode errors)
propagates from the transport unchanged.
"""

import httpx

from .base import ProviderError

MISSING_API_BASE_MESSAGE = (
    "No API base URL provided. Please set the 'api_base' option "
    "(or the F5AI_API_BASE environment variable)"
)


class ConfigurationError(ProviderError):
    """Raised before any network call when the provider is misconfigured."""

    def __init__(self, message: str = MISSING_API_BASE_MESSAGE, provider: str = "f5ai"):
        super().__init__(message, provider)


class TransportError(ProviderError):
    """Non-success HTTP response; the message is the raw response body."""

    @classmethod
    def from_response(cls, response: httpx.Response, provider: str = "f5ai") -> "TransportError":
        return cls(response.text, provider, status_code=response.status_code)
