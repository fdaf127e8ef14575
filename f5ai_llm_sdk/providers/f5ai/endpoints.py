"""Endpoint URL and header construction for the F5AI backend."""

from typing import Dict, Optional
from urllib.parse import quote, urljoin

from ...config.constants import AUTH_TOKEN_HEADER
from ...config.settings import F5AIConfig
from ..errors import ConfigurationError

CHAT_COMPLETIONS = "chat/completions"
COMPLETIONS = "completions"
FIM_COMPLETIONS = "fim/completions"
EMBEDDINGS = "embeddings"
RERANK = "rerank"
MODELS = "models"


def build_endpoint(config: F5AIConfig, endpoint: str, deployment_scoped: bool = True) -> str:
    """
    Resolve ``endpoint`` against the configured base URL.

    In Azure mode, deployment-scoped endpoints (chat, completions, embeddings,
    models) get a deployment path and the api-version query parameter; FIM
    and rerank always resolve directly against the base.

    Raises:
        ConfigurationError: If no base URL is configured
    """
    if not config.api_base:
        raise ConfigurationError()

    if deployment_scoped and config.is_azure:
        deployment = quote(config.deployment or "", safe="")
        return urljoin(
            config.api_base,
            f"openai/deployments/{deployment}/{endpoint}?api-version={config.api_version}",
        )
    return urljoin(config.api_base, endpoint)


def build_headers(api_key: Optional[str], accept_json: bool = False) -> Dict[str, str]:
    """Request headers: JSON body, bearer token and its gateway duplicate."""
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        AUTH_TOKEN_HEADER: api_key or "",
    }
    if accept_json:
        headers["Accept"] = "application/json"
    return headers
