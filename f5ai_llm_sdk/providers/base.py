"""
Base Provider Adapter Interface

This module defines the abstract base class for LLM provider adapters
speaking the platform's generic message/options shape.
"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator, List, Optional, Sequence

from ..models.conversation_types import ChatMessage
from ..models.generation import CompletionOptions
from ..models.responses import RerankResponse


class ProviderAdapter(ABC):
    """
    Abstract base class for LLM provider adapters.

    The adapter is responsible for:
    - Translating generic options to the backend's request body
    - Making API calls to the backend
    - Reshaping responses into the generic shape

    Provider adapters should NOT contain:
    - Retry or fallback logic
    - Cross-provider logic
    """

    @abstractmethod
    def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        options: CompletionOptions
    ) -> AsyncGenerator[ChatMessage, None]:
        """
        Generate a chat reply, yielding assistant messages as they become available.

        Args:
            messages: Conversation so far
            options: Model and sampling options

        Yields:
            ChatMessage: Assistant message fragments
        """

    @abstractmethod
    def stream_complete(
        self,
        prompt: str,
        options: CompletionOptions
    ) -> AsyncGenerator[str, None]:
        """
        Complete a single prompt, yielding text fragments.

        Args:
            prompt: Prompt text, sent as one user message
            options: Model and sampling options

        Yields:
            str: Text fragments
        """

    @abstractmethod
    def stream_fim(
        self,
        prefix: str,
        suffix: str,
        options: CompletionOptions
    ) -> AsyncGenerator[str, None]:
        """
        Fill in the middle between ``prefix`` and ``suffix``.

        Yields:
            str: Text fragments of the missing middle
        """

    @abstractmethod
    async def embed(self, chunks: List[str]) -> List[List[float]]:
        """
        Embed text chunks.

        Returns:
            One vector per input chunk, in input order
        """

    @abstractmethod
    async def rerank(
        self,
        query: str,
        documents: List[str],
        model: str,
        top_n: Optional[int] = None
    ) -> RerankResponse:
        """Score ``documents`` against ``query``."""

    @abstractmethod
    async def list_models(self) -> List[str]:
        """Identifiers of the models the backend serves."""

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the provider is configured.

        Returns:
            bool: True if provider is available, False otherwise
        """

    async def chat(self, messages: Sequence[ChatMessage], options: CompletionOptions) -> ChatMessage:
        """Collect ``stream_chat`` into a single assistant message."""
        parts: List[str] = []
        tool_calls = None
        async for message in self.stream_chat(messages, options):
            if isinstance(message.content, str):
                parts.append(message.content)
            if message.tool_calls:
                tool_calls = (tool_calls or []) + list(message.tool_calls)
        return ChatMessage(role="assistant", content="".join(parts), tool_calls=tool_calls)

    async def complete(self, prompt: str, options: CompletionOptions) -> str:
        """Collect ``stream_complete`` into one string."""
        completion = ""
        async for chunk in self.stream_complete(prompt, options):
            completion += chunk
        return completion

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        By default, returns the class name without 'Provider' suffix.

        Returns:
            str: The provider name (e.g., "f5ai")
        """
        class_name = self.__class__.__name__
        if class_name.endswith("Provider"):
            return class_name[:-8].lower()
        return class_name.lower()


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
