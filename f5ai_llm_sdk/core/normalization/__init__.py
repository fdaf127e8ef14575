"""Normalization layer for F5AI request and usage shapes.

This layer handles:
- Chat body construction from generic messages and options
- Model-family request rewrites
- Usage data normalization
"""

from .params import TOKEN_LIMIT_FIELDS, RequestNormalizer, convert_tool, message_to_dict, to_chat_body
from .usage import normalize_usage, usage_to_dict

__all__ = [
    "RequestNormalizer",
    "TOKEN_LIMIT_FIELDS",
    "convert_tool",
    "message_to_dict",
    "to_chat_body",
    "normalize_usage",
    "usage_to_dict",
]
