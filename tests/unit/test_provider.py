"""Unit tests for the F5AI generic-message provider."""

import json
import logging

import httpx
import pytest

from f5ai_llm_sdk.config.constants import DEV_API_BASE, OFFICIAL_API_BASE
from f5ai_llm_sdk.config.model_families import NormalizationRevision
from f5ai_llm_sdk.config.settings import F5AIConfig
from f5ai_llm_sdk.models.conversation_types import ChatMessage
from f5ai_llm_sdk.models.generation import CompletionOptions
from f5ai_llm_sdk.providers import ConfigurationError, TransportError
from f5ai_llm_sdk.providers.f5ai import F5AIProvider
from tests.helpers.http_mocks import chat_completion_payload, sse_response


def chat_route(payload):
    return {"chat/completions": lambda request: httpx.Response(200, json=payload)}


@pytest.mark.unit
class TestStreamChat:
    """Chat completions through the generic interface."""

    @pytest.mark.asyncio
    async def test_single_message_yielded(self, official_config, make_provider, sample_messages):
        provider, transport = make_provider(official_config, chat_route(chat_completion_payload("Hi!")))

        messages = [m async for m in provider.stream_chat(sample_messages, CompletionOptions(model="gpt-4o"))]

        assert len(messages) == 1
        assert messages[0].role == "assistant"
        assert messages[0].content == "Hi!"

    @pytest.mark.asyncio
    async def test_request_is_normalized(self, official_config, make_provider, sample_messages):
        provider, transport = make_provider(official_config, chat_route(chat_completion_payload()))
        options = CompletionOptions(model="o1-mini", max_tokens=500, stream=True)

        await provider.chat(sample_messages, options)

        request = transport.requests[0]
        body = json.loads(request.content)
        assert str(request.url) == "https://api.f5ai.ru/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["X-Auth-Token"] == "test-key"
        assert body["stream"] is False
        assert body["max_completion_tokens"] == 500
        assert "max_tokens" not in body
        assert [m["role"] for m in body["messages"]] == ["developer", "user"]

    @pytest.mark.asyncio
    async def test_tool_calls_returned(self, official_config, make_provider, weather_tool):
        tool_calls = [{"id": "call_1", "type": "function",
                       "function": {"name": "get_weather", "arguments": "{\"city\": \"Moscow\"}"}}]
        payload = chat_completion_payload(None, tool_calls=tool_calls, finish_reason="tool_calls")
        provider, transport = make_provider(official_config, chat_route(payload))
        options = CompletionOptions(model="gpt-4o", tools=[weather_tool])

        reply = await provider.chat([ChatMessage(role="user", content="Weather?")], options)

        assert reply.tool_calls == tool_calls
        assert transport.bodies()[0]["parallel_tool_calls"] is False

    @pytest.mark.asyncio
    async def test_http_errors_propagate(self, official_config, make_provider, sample_messages):
        provider, _ = make_provider(official_config, {
            "chat/completions": lambda request: httpx.Response(500, text="boom"),
        })

        with pytest.raises(httpx.HTTPStatusError):
            await provider.chat(sample_messages, CompletionOptions(model="gpt-4o"))

    @pytest.mark.asyncio
    async def test_missing_base_fails_before_network(self, make_provider, sample_messages):
        provider, transport = make_provider(F5AIConfig(api_key="k", api_base=None), {})

        with pytest.raises(ConfigurationError):
            await provider.chat(sample_messages, CompletionOptions(model="gpt-4o"))
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_azure_route(self, make_provider, sample_messages):
        config = F5AIConfig(api_key="k", api_base="https://r.example.com/", api_type="azure", deployment="dep")
        provider, transport = make_provider(config, chat_route(chat_completion_payload()))

        await provider.chat(sample_messages, CompletionOptions(model="gpt-4o"))

        url = transport.requests[0].url
        assert url.path == "/openai/deployments/dep/chat/completions"
        assert url.params["api-version"] == "2023-07-01-preview"

    @pytest.mark.asyncio
    async def test_usage_logged(self, official_config, make_provider, sample_messages, caplog):
        provider, _ = make_provider(official_config, chat_route(chat_completion_payload()))

        with caplog.at_level(logging.INFO, logger="f5ai_llm_sdk.providers.f5ai"):
            await provider.chat(sample_messages, CompletionOptions(model="gpt-4o"))

        assert "Token usage" in caplog.text
        assert "total_tokens=15" in caplog.text
        assert "Completed chat request" in caplog.text
        assert "family=gpt" in caplog.text
        assert "revision=current" in caplog.text


@pytest.mark.unit
class TestLegacyCompletions:
    """Routing to the prompt-in/text-out endpoint."""

    @pytest.fixture
    def legacy_route(self):
        events = [
            {"choices": [{"text": "Hello"}]},
            {"choices": [{"text": " world"}]},
            {"choices": [{"text": "", "finish_reason": "eos"}]},
        ]
        return {"completions": lambda request: sse_response(events)}

    @pytest.mark.asyncio
    async def test_non_chat_model_uses_completions(self, dev_config, make_provider, legacy_route):
        provider, transport = make_provider(dev_config, legacy_route)
        options = CompletionOptions(model="text-davinci-003", stop=["1", "2", "3", "4", "5"])

        reply = await provider.chat([ChatMessage(role="user", content="Say hi")], options)

        body = transport.bodies()[0]
        assert transport.requests[0].url.path == "/v1/completions"
        assert reply.content == "Hello world"
        assert body["prompt"] == "Say hi"
        assert "messages" not in body
        assert body["stop"] == ["1", "2", "3", "4"]
        assert body["stream"] is False

    @pytest.mark.asyncio
    async def test_legacy_mode_and_raw(self, make_provider, legacy_route):
        config = F5AIConfig(api_key="k", use_legacy_completions_endpoint=True)
        provider, transport = make_provider(config, legacy_route)

        text = await provider.complete("prompt", CompletionOptions(model="deepseek-coder"))

        assert text == "Hello world"
        assert transport.requests[0].url.path == "/v1/completions"

        raw_provider, raw_transport = make_provider(F5AIConfig(api_key="k"), legacy_route)
        messages = [ChatMessage(role="user", content="first"), ChatMessage(role="user", content="last")]
        await raw_provider.chat(messages, CompletionOptions(model="deepseek-coder", raw=True))
        assert raw_transport.bodies()[0]["prompt"] == "last"

    @pytest.mark.asyncio
    async def test_chat_only_models_never_use_legacy(self, make_provider):
        config = F5AIConfig(api_key="k", use_legacy_completions_endpoint=True)
        provider, transport = make_provider(config, chat_route(chat_completion_payload("chat!")))

        text = await provider.complete("prompt", CompletionOptions(model="gpt-4o-mini"))

        assert text == "chat!"
        assert transport.requests[0].url.path == "/v1/chat/completions"


@pytest.mark.unit
class TestFim:
    """Fill-in-the-middle."""

    @pytest.mark.asyncio
    async def test_sse_fragments(self, official_config, make_provider):
        events = [
            {"choices": [{"delta": {"content": "return "}}]},
            {"choices": [{"delta": {"content": "a + b"}}]},
        ]
        provider, transport = make_provider(official_config, {
            "fim/completions": lambda request: sse_response(events),
        })
        options = CompletionOptions(model="codestral", max_tokens=64, temperature=0.1)

        fragments = [f async for f in provider.stream_fim("def add(a, b):\n    ", "\n", options)]

        request = transport.requests[0]
        body = json.loads(request.content)
        assert fragments == ["return ", "a + b"]
        assert str(request.url) == "https://api.f5ai.ru/v1/fim/completions"
        assert request.headers["Accept"] == "application/json"
        assert body == {
            "model": "codestral",
            "prompt": "def add(a, b):\n    ",
            "suffix": "\n",
            "max_tokens": 64,
            "temperature": 0.1,
            "stream": False,
        }

    @pytest.mark.asyncio
    async def test_json_reply(self, make_provider):
        config = F5AIConfig(api_key="k", revision=NormalizationRevision.LEGACY)
        provider, transport = make_provider(config, {
            "fim/completions": lambda request: httpx.Response(200, json={"choices": [{"text": "mid"}]}),
        })

        fragments = [f async for f in provider.stream_fim("a", "c", CompletionOptions(model="codestral", max_tokens=8))]

        assert fragments == ["mid"]
        assert transport.bodies()[0]["max_tokens"] == 8


@pytest.mark.unit
class TestEmbed:
    """Embedding batching and error reporting."""

    @staticmethod
    def embed_route(request):
        body = json.loads(request.content)
        data = [{"index": i, "embedding": [float(len(text)), 0.5]} for i, text in enumerate(body["input"])]
        return httpx.Response(200, json={"data": data, "model": body["model"]})

    @pytest.mark.asyncio
    async def test_batches_preserve_order(self, make_provider):
        config = F5AIConfig(api_key="k", max_embedding_batch_size=2)
        provider, transport = make_provider(config, {"embeddings": self.embed_route})

        vectors = await provider.embed(["a", "bb", "ccc", "dddd", "eeeee"])

        assert [v[0] for v in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]
        assert [len(b["input"]) for b in transport.bodies()] == [2, 2, 1]
        assert all(b["model"] == "text-embedding-3-large" for b in transport.bodies())

    @pytest.mark.asyncio
    async def test_empty_input_makes_no_request(self, official_config, make_provider):
        provider, transport = make_provider(official_config, {"embeddings": self.embed_route})

        assert await provider.embed([]) == []
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_non_success_raises_with_body(self, official_config, make_provider):
        provider, _ = make_provider(official_config, {
            "embeddings": lambda request: httpx.Response(429, text="rate limited, retry later"),
        })

        with pytest.raises(TransportError) as exc_info:
            await provider.embed(["x"], model="text-embedding-3-small")

        assert exc_info.value.message == "rate limited, retry later"
        assert exc_info.value.status_code == 429


@pytest.mark.unit
class TestRerankAndModels:
    """Rerank and model listing."""

    @pytest.mark.asyncio
    async def test_rerank(self, make_provider):
        config = F5AIConfig(api_key="k", api_base="https://r.example.com/", api_type="azure", deployment="d")
        result = {"data": [{"index": 1, "relevance_score": 0.9}, {"index": 0, "relevance_score": 0.1}],
                  "model": "rerank-v1"}
        provider, transport = make_provider(config, {
            "rerank": lambda request: httpx.Response(200, json=result),
        })

        response = await provider.rerank("capital of France", ["Berlin", "Paris"], model="rerank-v1", top_n=2)

        assert str(transport.requests[0].url) == "https://r.example.com/rerank"
        assert transport.bodies()[0] == {
            "model": "rerank-v1",
            "query": "capital of France",
            "documents": ["Berlin", "Paris"],
            "top_n": 2,
        }
        assert response.data[0]["index"] == 1

    @pytest.mark.asyncio
    async def test_list_models_preserves_order(self, official_config, make_provider):
        payload = {"object": "list", "data": [{"id": "o1-mini"}, {"id": "gpt-4o"}, {"id": "codestral"}]}
        provider, transport = make_provider(official_config, {
            "models": lambda request: httpx.Response(200, json=payload),
        })

        assert await provider.list_models() == ["o1-mini", "gpt-4o", "codestral"]
        assert transport.requests[0].method == "GET"


@pytest.mark.unit
class TestProviderBasics:
    """Availability, naming and client lifecycle."""

    def test_is_available(self):
        assert F5AIProvider(F5AIConfig(api_key="k")).is_available()
        assert not F5AIProvider(F5AIConfig()).is_available()
        assert not F5AIProvider(F5AIConfig(api_key="k", api_base=None)).is_available()

    def test_provider_name(self, official_config):
        assert F5AIProvider(official_config).get_provider_name() == "f5ai"

    def test_config_from_env(self, mock_env_vars):
        provider = F5AIProvider()

        assert provider.config.api_key == "test-f5ai-key"
        assert provider.normalizer.is_official_endpoint

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        provider = F5AIProvider(F5AIConfig(api_key="k", api_base=DEV_API_BASE))
        client = provider.client

        async with provider:
            assert provider.client is client

        assert client.is_closed
        assert provider._client is None

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        client = httpx.AsyncClient()
        provider = F5AIProvider(F5AIConfig(api_key="k", api_base=OFFICIAL_API_BASE), http_client=client)

        await provider.aclose()

        assert not client.is_closed
        await client.aclose()
