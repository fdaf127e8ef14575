from typing import Any, Dict, List, Optional

import httpx
from openai import AsyncOpenAI

from ..errors import ConfigurationError
from .endpoints import FIM_COMPLETIONS, RERANK, build_headers
from ...config.constants import AUTH_TOKEN_HEADER, DEFAULT_API_BASE
from ...config.settings import F5AIConfig
from ...core.normalization import RequestNormalizer, normalize_usage, usage_to_dict
from ...models.generation import FimRequest, RerankRequest
from ...models.responses import RerankResponse, SyntheticChunk
from ...observability.logging import ProviderLogger
from ...streaming import SingleChunkStream, chat_completion_to_chunk, fim_response_to_chunk

logger = ProviderLogger("f5ai")


class F5AIApi:
    """OpenAI-compatible surface over the F5AI backend.

    Chat bodies pass through ``RequestNormalizer`` before being sent with the
    ``openai`` SDK. The backend never streams, so every "stream" method
    returns a ``SingleChunkStream`` wrapping one non-streamed round trip.
    Azure mode is not used here; a missing base URL means the official one.
    """

    def __init__(
        self,
        config: Optional[F5AIConfig] = None,
        client: Optional[AsyncOpenAI] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        config = config or F5AIConfig.from_env()
        if config.api_base is None:
            config = config.model_copy(update={"api_base": DEFAULT_API_BASE})
        self.config = config
        self.normalizer = RequestNormalizer.from_config(config)
        self._client = client
        self._owns_client = client is None
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of the OpenAI SDK client."""
        if self._client is None:
            if not self.config.api_key:
                raise ConfigurationError("F5AI API key not found")
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.api_base,
                timeout=self.config.timeout,
                default_headers={AUTH_TOKEN_HEADER: self.config.api_key},
            )
        return self._client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Plain HTTP client for endpoints the SDK does not cover (FIM, rerank)."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.close()
            self._client = None
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _url(self, endpoint: str) -> str:
        return f"{self.config.api_base}{endpoint}"

    async def chat_completion_non_stream(self, body: Dict[str, Any]) -> Any:
        """Normalize ``body`` and perform one chat completion."""
        model = body.get("model")
        with logger.track_request("chat_completion", model, revision=self.normalizer.revision) as request_info:
            response = await self.client.chat.completions.create(
                **self.normalizer.modify_chat_body(body)
            )
            if getattr(response, "usage", None):
                logger.log_usage(normalize_usage(usage_to_dict(response.usage)), model, request_info['request_id'])
            return response

    def chat_completion_stream(self, body: Dict[str, Any]) -> SingleChunkStream[SyntheticChunk]:
        """One chat completion delivered as a single ``chat.completion.chunk``."""
        async def produce() -> SyntheticChunk:
            return chat_completion_to_chunk(await self.chat_completion_non_stream(body))

        return SingleChunkStream(produce)

    async def completion_non_stream(self, body: Dict[str, Any]) -> Any:
        with logger.track_request("completion", body.get("model")):
            return await self.client.completions.create(**{**body, "stream": False})

    def completion_stream(self, body: Dict[str, Any]) -> SingleChunkStream[Any]:
        """Legacy completion delivered unchanged as a single item."""
        return SingleChunkStream(lambda: self.completion_non_stream(body))

    def fim_stream(self, body: Dict[str, Any]) -> SingleChunkStream[SyntheticChunk]:
        """Fill-in-the-middle request delivered as a single chunk."""
        request = FimRequest.model_validate(body)

        async def produce() -> SyntheticChunk:
            payload = request.model_dump(exclude_none=True)
            payload["stream"] = False
            with logger.track_request("fim", request.model):
                response = await self.http_client.post(
                    self._url(FIM_COMPLETIONS),
                    json=payload,
                    headers=build_headers(self.config.api_key, accept_json=True),
                )
                response.raise_for_status()
                return fim_response_to_chunk(response.json(), request.model)

        return SingleChunkStream(produce)

    async def embed(self, body: Dict[str, Any]) -> Any:
        with logger.track_request("embed", body.get("model")):
            return await self.client.embeddings.create(**body)

    async def rerank(self, body: Dict[str, Any]) -> RerankResponse:
        with logger.track_request("rerank", body.get("model")):
            response = await self.http_client.post(
                self._url(RERANK),
                json=RerankRequest.model_validate(body).model_dump(exclude_none=True),
                headers=build_headers(self.config.api_key, accept_json=True),
            )
            response.raise_for_status()
            return RerankResponse.model_validate(response.json())

    async def list(self) -> List[Any]:
        """Model records as served by the backend, in backend order."""
        with logger.track_request("list_models", None):
            page = await self.client.models.list()
            return list(page.data)
