"""
Request normalization module.

This module turns a generic completion request into the exact chat body the
F5AI backend expects. Model-family behavior comes from the rule tables in
``core.capabilities`` so the same code serves both request revisions:
- max_tokens vs max_completion_tokens per family
- system role replacement for families that reject it
- stop sequence truncation to the backend ceiling
- prediction pass-through only for models that accept it
- parallel tool calls forced off when tools are attached
- stream always off on the wire
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ...config.constants import OFFICIAL_API_BASE
from ...config.model_families import NormalizationRevision, classify_model
from ...config.settings import F5AIConfig
from ...models.conversation_types import ChatMessage, Tool
from ...models.generation import CompletionOptions
from ..capabilities import (
    get_max_stop_words,
    get_revision_policy,
    should_disable_parallel_tool_calls,
    supports_prediction,
)
from .messages import prepend_to_first_user_message, rewrite_system_role

logger = logging.getLogger(__name__)

TOKEN_LIMIT_FIELDS = ("max_tokens", "max_completion_tokens")


def convert_tool(tool: Union[Tool, Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a tool definition into the OpenAI wire shape."""
    if isinstance(tool, dict):
        tool = Tool.model_validate(tool)
    function = {
        "name": tool.function.name,
        "description": tool.function.description,
        "parameters": tool.function.parameters,
        "strict": tool.function.strict,
    }
    return {
        "type": tool.type,
        "function": {key: value for key, value in function.items() if value is not None},
    }


def message_to_dict(message: Union[ChatMessage, Dict[str, Any]]) -> Dict[str, Any]:
    """Copy a message into a plain dict (ChatMessage objects or plain dicts)."""
    if isinstance(message, ChatMessage):
        return message.to_wire()
    if isinstance(message, dict) and "role" in message:
        return dict(message)
    raise ValueError(f"Invalid message format: {type(message)} - {message}")


def to_chat_body(
    messages: Sequence[Union[ChatMessage, Dict[str, Any]]],
    options: CompletionOptions
) -> Dict[str, Any]:
    """
    Build an OpenAI chat completion body from generic messages and options.

    No family rules are applied here; see ``RequestNormalizer``.
    """
    body: Dict[str, Any] = {
        "model": options.model,
        "messages": [message_to_dict(message) for message in messages],
        "max_tokens": options.max_tokens,
        "temperature": options.temperature,
        "top_p": options.top_p,
        "frequency_penalty": options.frequency_penalty,
        "presence_penalty": options.presence_penalty,
        "stop": options.stop,
        "stream": options.stream,
        "prediction": options.prediction,
    }
    if options.tools:
        body["tools"] = [convert_tool(tool) for tool in options.tools]
        body["tool_choice"] = options.tool_choice
    return body


class RequestNormalizer:
    """Apply F5AI request rules to OpenAI-shaped chat bodies."""

    def __init__(
        self,
        api_base: Optional[str] = OFFICIAL_API_BASE,
        api_type: Optional[str] = None,
        max_stop_words: Optional[int] = None,
        revision: NormalizationRevision = NormalizationRevision.CURRENT,
        o_series_instructions: Optional[str] = None
    ):
        """
        Args:
            api_base: Backend base URL, used for host-based ceilings and the official check
            api_type: API flavour ("azure" or None)
            max_stop_words: Stop-sequence ceiling override
            revision: Which generation of family rules to apply
            o_series_instructions: Optional preamble for o-series prompts
        """
        self.api_base = api_base
        self.api_type = api_type
        self.revision = NormalizationRevision(revision)
        self.policy = get_revision_policy(self.revision)
        self.o_series_instructions = o_series_instructions
        self._max_stop_words_override = max_stop_words

    @classmethod
    def from_config(cls, config: F5AIConfig) -> "RequestNormalizer":
        return cls(
            api_base=config.api_base,
            api_type=config.api_type,
            max_stop_words=config.max_stop_words,
            revision=config.revision,
            o_series_instructions=config.o_series_instructions,
        )

    @property
    def is_official_endpoint(self) -> bool:
        return self.api_base == OFFICIAL_API_BASE

    @property
    def max_stop_words(self) -> Optional[int]:
        """Stop-sequence ceiling for the target backend; None means unbounded."""
        return get_max_stop_words(self.api_base, self.api_type, self._max_stop_words_override)

    def build_chat_body(
        self,
        messages: Sequence[Union[ChatMessage, Dict[str, Any]]],
        options: CompletionOptions
    ) -> Dict[str, Any]:
        """Build and normalize a chat body from generic messages and options."""
        return self.modify_chat_body(to_chat_body(messages, options))

    def modify_chat_body(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply every normalization rule to an OpenAI chat body.

        The input is left untouched; a new dict without None-valued fields
        is returned. Unknown families simply get no family rewrites.
        """
        body = dict(body)
        if body.get("messages") is not None:
            body["messages"] = [message_to_dict(message) for message in body["messages"]]

        model = body.get("model") or ""
        family = classify_model(model)
        rules = self.policy.rules_for(family)
        family_rules_active = self.is_official_endpoint or not self.policy.requires_official_endpoint
        applied: List[str] = []

        self._truncate_stop(body, applied)

        if family_rules_active:
            if rules.token_field is not None:
                self._move_token_limit(body, rules.token_field)
                applied.append(f"token_field={rules.token_field}")
            if rules.system_role and body.get("messages"):
                body["messages"] = rewrite_system_role(body["messages"], rules.system_role)
                applied.append(f"system_role={rules.system_role}")
            if rules.inject_instructions and self.o_series_instructions and body.get("messages"):
                body["messages"] = prepend_to_first_user_message(
                    body["messages"], self.o_series_instructions
                )
                applied.append("instructions")

        if body.get("prediction") and supports_prediction(model):
            # Prediction mode rejects non-zero penalties
            if body.get("presence_penalty"):
                body.pop("presence_penalty")
            if body.get("frequency_penalty"):
                body.pop("frequency_penalty")
            body.pop("max_completion_tokens", None)
            applied.append("prediction")
        else:
            body.pop("prediction", None)

        if (
            family_rules_active
            and body.get("tools")
            and should_disable_parallel_tool_calls(rules, model)
        ):
            # Parallel calls make the backend concatenate tool arguments
            body["parallel_tool_calls"] = False
            applied.append("parallel_tool_calls=false")

        self._enforce_exclusive_token_limits(body)

        # Backend does not support incremental streaming
        body["stream"] = False
        body.pop("stream_options", None)

        logger.debug(
            "Normalized chat body model=%s family=%s revision=%s rules=%s",
            model, family.value, self.revision.value, ",".join(applied) or "none"
        )
        return {key: value for key, value in body.items() if value is not None}

    def _truncate_stop(self, body: Dict[str, Any], applied: List[str]) -> None:
        stop = body.get("stop")
        ceiling = self.max_stop_words
        if stop is None or ceiling is None:
            return
        if isinstance(stop, str):
            stop = [stop]
        if len(stop) > ceiling:
            body["stop"] = list(stop[:ceiling])
            applied.append(f"stop[:{ceiling}]")

    @staticmethod
    def _move_token_limit(body: Dict[str, Any], field: str) -> None:
        limit = body.get("max_tokens")
        if limit is None:
            limit = body.get("max_completion_tokens")
        for name in TOKEN_LIMIT_FIELDS:
            body.pop(name, None)
        body[field] = limit

    @staticmethod
    def _enforce_exclusive_token_limits(body: Dict[str, Any]) -> None:
        if body.get("max_tokens") is not None and body.get("max_completion_tokens") is not None:
            body.pop("max_completion_tokens")
