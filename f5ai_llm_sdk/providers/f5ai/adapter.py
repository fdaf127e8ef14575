import time
from typing import AsyncGenerator, List, Optional, Sequence

import httpx

from ..base import ProviderAdapter
from ..errors import TransportError
from .endpoints import (
    CHAT_COMPLETIONS,
    COMPLETIONS,
    EMBEDDINGS,
    FIM_COMPLETIONS,
    MODELS,
    RERANK,
    build_endpoint,
    build_headers,
)
from ...config.constants import CHAT_ONLY_MODELS, NON_CHAT_MODELS
from ...config.settings import F5AIConfig
from ...core.normalization import RequestNormalizer, normalize_usage
from ...models.conversation_types import ChatMessage, render_chat_message
from ...models.generation import CompletionOptions, FimRequest, RerankRequest
from ...models.responses import CompletionResponse, RerankResponse
from ...observability.logging import ProviderLogger
from ...streaming import extract_completion_text, extract_fim_text, iter_sse_events

logger = ProviderLogger("f5ai")


class F5AIProvider(ProviderAdapter):
    """F5AI provider speaking the generic message/options shape over httpx."""

    def __init__(
        self,
        config: Optional[F5AIConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.config = config or F5AIConfig.from_env()
        self.normalizer = RequestNormalizer.from_config(self.config)
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "F5AIProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _headers(self, accept_json: bool = False) -> dict:
        return build_headers(self.config.api_key, accept_json=accept_json)

    def _use_legacy_completions(self, options: CompletionOptions) -> bool:
        if options.model in CHAT_ONLY_MODELS:
            return False
        return (
            options.model in NON_CHAT_MODELS
            or self.config.use_legacy_completions_endpoint
            or options.raw
        )

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        options: CompletionOptions
    ) -> AsyncGenerator[ChatMessage, None]:
        """Generate a chat reply.

        Legacy models, legacy mode and raw prompts go to the completions
        endpoint with the last message as prompt; everything else is one
        non-streamed chat completion yielded as a single message.
        """
        if self._use_legacy_completions(options):
            prompt = render_chat_message(messages[-1]) if messages else ""
            async for content in self._legacy_stream_complete(prompt, options):
                yield ChatMessage(role="assistant", content=content)
            return

        with logger.track_request("chat", options.model, revision=self.normalizer.revision) as request_info:
            url = build_endpoint(self.config, CHAT_COMPLETIONS)
            body = self.normalizer.build_chat_body(messages, options)

            response = await self.client.post(url, json=body, headers=self._headers())
            response.raise_for_status()
            completion = CompletionResponse.model_validate(response.json())

            if completion.usage:
                logger.log_usage(
                    normalize_usage(completion.usage.model_dump()),
                    options.model,
                    request_info['request_id']
                )
            message = completion.choices[0].message

        yield message

    async def stream_complete(
        self,
        prompt: str,
        options: CompletionOptions
    ) -> AsyncGenerator[str, None]:
        async for message in self.stream_chat([ChatMessage(role="user", content=prompt)], options):
            yield render_chat_message(message)

    async def _legacy_stream_complete(
        self,
        prompt: str,
        options: CompletionOptions
    ) -> AsyncGenerator[str, None]:
        with logger.track_request(
            "legacy_complete", options.model, revision=self.normalizer.revision
        ) as request_info:
            url = build_endpoint(self.config, COMPLETIONS)
            body = self.normalizer.build_chat_body([], options)
            body.pop("messages", None)
            body["prompt"] = prompt

            start_time = time.time()
            chunks = 0
            total_chars = 0
            async with self.client.stream("POST", url, json=body, headers=self._headers()) as response:
                response.raise_for_status()
                async for event in iter_sse_events(response):
                    text = extract_completion_text(event)
                    if text:
                        chunks += 1
                        total_chars += len(text)
                        yield text

            logger.log_streaming_metrics(
                chunks, total_chars, time.time() - start_time,
                options.model, request_info['request_id']
            )

    async def stream_fim(
        self,
        prefix: str,
        suffix: str,
        options: CompletionOptions
    ) -> AsyncGenerator[str, None]:
        with logger.track_request("fim", options.model) as request_info:
            url = build_endpoint(self.config, FIM_COMPLETIONS, deployment_scoped=False)
            body = FimRequest(
                model=options.model,
                prompt=prefix,
                suffix=suffix,
                max_tokens=options.max_tokens,
                temperature=options.temperature,
                top_p=options.top_p,
                frequency_penalty=options.frequency_penalty,
                presence_penalty=options.presence_penalty,
                stop=options.stop,
            ).model_dump(exclude_none=True)
            body["stream"] = False

            start_time = time.time()
            chunks = 0
            total_chars = 0
            async with self.client.stream(
                "POST", url, json=body, headers=self._headers(accept_json=True)
            ) as response:
                response.raise_for_status()
                async for event in iter_sse_events(response):
                    text = extract_fim_text(event)
                    if text:
                        chunks += 1
                        total_chars += len(text)
                        yield text

            logger.log_streaming_metrics(
                chunks, total_chars, time.time() - start_time,
                options.model, request_info['request_id']
            )

    async def embed(self, chunks: List[str], model: Optional[str] = None) -> List[List[float]]:
        """Embed ``chunks`` in batches of at most ``max_embedding_batch_size``."""
        model = model or self.config.embedding_model
        batch_size = self.config.max_embedding_batch_size
        vectors: List[List[float]] = []
        for start in range(0, len(chunks), batch_size):
            vectors.extend(await self._embed(chunks[start:start + batch_size], model))
        return vectors

    async def _embed(self, chunks: List[str], model: str) -> List[List[float]]:
        with logger.track_request("embed", model) as request_info:
            url = build_endpoint(self.config, EMBEDDINGS)
            response = await self.client.post(
                url, json={"input": chunks, "model": model}, headers=self._headers()
            )
            if not response.is_success:
                raise TransportError.from_response(response)

            data = response.json()
            logger.debug(
                "Embedded batch",
                model=model,
                request_id=request_info['request_id'],
                inputs=len(chunks)
            )
            return [item["embedding"] for item in data["data"]]

    async def rerank(
        self,
        query: str,
        documents: List[str],
        model: str,
        top_n: Optional[int] = None
    ) -> RerankResponse:
        with logger.track_request("rerank", model):
            url = build_endpoint(self.config, RERANK, deployment_scoped=False)
            body = RerankRequest(model=model, query=query, documents=documents, top_n=top_n)
            response = await self.client.post(
                url, json=body.model_dump(exclude_none=True), headers=self._headers(accept_json=True)
            )
            response.raise_for_status()
            return RerankResponse.model_validate(response.json())

    async def list_models(self) -> List[str]:
        with logger.track_request("list_models", None):
            url = build_endpoint(self.config, MODELS)
            response = await self.client.get(url, headers=self._headers())
            response.raise_for_status()
            data = response.json()
            return [model["id"] for model in data["data"]]

    def is_available(self) -> bool:
        """Check if the F5AI backend is configured."""
        return bool(self.config.api_key and self.config.api_base)
