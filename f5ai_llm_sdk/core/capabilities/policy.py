"""
Backend and model policy helpers.

Decisions that depend on the target host or on a model allow-list rather
than on a model family live here, next to the family tables.
"""

from typing import Optional
from urllib.parse import urlparse

from ...config.constants import (
    AZURE_API_TYPE,
    AZURE_MAX_STOP_WORDS,
    PREDICTION_MODELS,
    STOP_WORD_LIMITS_BY_HOST,
    STOP_WORD_LIMITS_BY_PORT,
)
from .models import FamilyRules


def get_max_stop_words(
    api_base: Optional[str],
    api_type: Optional[str] = None,
    override: Optional[int] = None
) -> Optional[int]:
    """
    Determine how many stop sequences the backend accepts.

    Args:
        api_base: Backend base URL
        api_type: API flavour ("azure" enables the Azure ceiling)
        override: Caller-supplied ceiling, always wins when set

    Returns:
        The ceiling, or None when the backend is not known to limit stop words
    """
    if override is not None:
        return override

    host = ""
    port = None
    if api_base:
        parsed = urlparse(api_base)
        host = (parsed.hostname or "").lower()
        try:
            port = parsed.port
        except ValueError:
            port = None

    if host in STOP_WORD_LIMITS_BY_HOST:
        return STOP_WORD_LIMITS_BY_HOST[host]
    if port in STOP_WORD_LIMITS_BY_PORT:
        return STOP_WORD_LIMITS_BY_PORT[port]
    if api_type == AZURE_API_TYPE:
        return AZURE_MAX_STOP_WORDS
    return None


def supports_prediction(model_id: Optional[str]) -> bool:
    """Whether the model accepts a speculative-decoding prediction payload."""
    if not model_id:
        return False
    return any(name in model_id for name in PREDICTION_MODELS)


def should_disable_parallel_tool_calls(rules: FamilyRules, model_id: str) -> bool:
    """Whether parallel_tool_calls must be forced off for this model."""
    if not rules.disable_parallel_tool_calls:
        return False
    return not any(model_id.startswith(prefix) for prefix in rules.parallel_tool_calls_exempt_prefixes)
