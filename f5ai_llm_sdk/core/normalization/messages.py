"""Message-level rewrites applied during request normalization."""

from typing import Any, Dict, List


def rewrite_system_role(messages: List[Dict[str, Any]], role: str) -> List[Dict[str, Any]]:
    """Return a copy of ``messages`` with every system message moved to ``role``.

    Content and all other fields are left untouched.
    """
    return [
        {**message, "role": role} if message.get("role") == "system" else message
        for message in messages
    ]


def prepend_to_first_user_message(
    messages: List[Dict[str, Any]],
    text: str
) -> List[Dict[str, Any]]:
    """Return a copy of ``messages`` with ``text`` prepended to the first user turn."""
    result = list(messages)
    for i, message in enumerate(result):
        if message.get("role") != "user":
            continue
        content = message.get("content")
        if isinstance(content, list):
            new_content = [{"type": "text", "text": text}] + list(content)
        else:
            new_content = text + (content or "")
        result[i] = {**message, "content": new_content}
        break
    return result
