"""
Usage normalization module.

F5AI reports usage in the OpenAI shape, but gateways in front of it are not
always consistent (missing totals, ``None`` counters, pydantic objects
instead of dicts). These helpers bring usage into one standard shape for
logging.
"""

from typing import Any, Dict, Optional


def usage_to_dict(usage: Any) -> Optional[Dict[str, Any]]:
    """Turn an SDK usage object, a pydantic model or a dict into a plain dict."""
    if usage is None:
        return None
    if isinstance(usage, dict):
        return usage
    if hasattr(usage, "model_dump"):
        try:
            return usage.model_dump()
        except Exception:
            return {}
    return dict(getattr(usage, "__dict__", {}))


def normalize_usage(usage_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Normalize usage data into standard SDK format.

    The returned dict always has the shape:
    {
        "prompt_tokens": int,
        "completion_tokens": int,
        "total_tokens": int,
        "cache_info": dict
    }

    Args:
        usage_data: Raw usage data from the backend (optional)

    Returns:
        Dict with normalized usage data
    """
    normalized = {
        "prompt_tokens": 0,
        "completion_tokens": 0,
        "total_tokens": 0,
        "cache_info": {}
    }
    if not usage_data:
        return normalized

    normalized["prompt_tokens"] = int(usage_data.get("prompt_tokens") or 0)
    normalized["completion_tokens"] = int(usage_data.get("completion_tokens") or 0)
    normalized["total_tokens"] = int(usage_data.get("total_tokens") or 0)

    # Handle cache info
    details = usage_data.get("prompt_tokens_details")
    if isinstance(details, dict) and details.get("cached_tokens") is not None:
        normalized["cache_info"] = {
            "cached_tokens": details["cached_tokens"],
            "prompt_tokens_details": details
        }

    # Ensure total_tokens is accurate
    if normalized["total_tokens"] == 0:
        normalized["total_tokens"] = normalized["prompt_tokens"] + normalized["completion_tokens"]

    return normalized
