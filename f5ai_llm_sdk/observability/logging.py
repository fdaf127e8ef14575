"""
Structured logging utility for provider adapters.

Every log line carries ``provider``, ``model`` and ``request_id`` fields so
one request can be followed through normalization, transport and reshaping.
Requests tracked with ``track_request`` also repeat their request context
(revision, model family, endpoint) on the start, completion and failure
lines.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Optional

from ..config.model_families import classify_model


def _field_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class ProviderLogger:
    """Structured logger for provider adapters."""

    def __init__(self, provider_name: str):
        self.provider = provider_name
        self.logger = logging.getLogger(f"f5ai_llm_sdk.providers.{provider_name}")

    def _format_message(self, message: str, **fields) -> str:
        parts = [f"provider={self.provider}"]
        for key, value in fields.items():
            if value is not None:
                parts.append(f"{key}={_field_value(value)}")
        return f"[{' '.join(parts)}] {message}"

    def debug(self, message: str, **fields):
        self.logger.debug(self._format_message(message, **fields))

    def info(self, message: str, **fields):
        self.logger.info(self._format_message(message, **fields))

    def error(self, message: str, error: Optional[Exception] = None, **fields):
        if error is not None:
            fields["error_type"] = type(error).__name__
            fields["error_msg"] = str(error)
        self.logger.error(self._format_message(message, **fields))

    @contextmanager
    def track_request(
        self,
        method: str,
        model: Optional[str],
        request_id: Optional[str] = None,
        **context
    ):
        """
        Track one backend round trip.

        The model family is derived from ``model``; any extra keyword
        (``revision``, ``endpoint``) is logged on every line of the request.
        Failures are logged and re-raised unchanged.

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        fields = {
            "model": model,
            "request_id": request_id,
            "method": method,
            "family": classify_model(model) if model else None,
            **context,
        }
        start_time = time.time()
        self.debug(f"Starting {method} request", **fields)

        metadata = {"start_time": start_time, **fields}
        try:
            yield metadata
        except Exception as e:
            self.error(
                f"Failed {method} request",
                error=e,
                duration_ms=int((time.time() - start_time) * 1000),
                **fields
            )
            raise
        self.info(
            f"Completed {method} request",
            duration_ms=int((time.time() - start_time) * 1000),
            **fields
        )

    def log_usage(self, usage: Dict[str, Any], model: Optional[str], request_id: str):
        """Log token usage reported by the backend."""
        cache_info = usage.get("cache_info") or {}
        try:
            cached = int(cache_info.get("cached_tokens") or 0)
        except (TypeError, ValueError):
            cached = 0

        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
            cached_tokens=cached or None
        )

    def log_streaming_metrics(self, chunks: int, total_chars: int, duration: float,
                              model: Optional[str], request_id: str):
        """Log how many SSE fragments a buffered reply arrived in."""
        self.info(
            "SSE fragments",
            model=model,
            request_id=request_id,
            chunks=chunks,
            total_chars=total_chars,
            duration_ms=int(duration * 1000)
        )
