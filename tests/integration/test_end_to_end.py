"""End-to-end integration tests for F5AI LLM SDK."""

import json

import httpx
import pytest
from openai import AsyncOpenAI

from f5ai_llm_sdk import (
    ChatMessage,
    CompletionOptions,
    F5AIApi,
    F5AIConfig,
    F5AIProvider,
    NormalizationRevision,
)
from f5ai_llm_sdk.config.constants import OFFICIAL_API_BASE
from tests.helpers.http_mocks import RecordingTransport, chat_completion_payload

MODELS_PAYLOAD = {
    "object": "list",
    "data": [
        {"id": "o3-mini", "object": "model", "created": 0, "owned_by": "f5ai"},
        {"id": "gpt-4o", "object": "model", "created": 0, "owned_by": "f5ai"},
        {"id": "codestral", "object": "model", "created": 0, "owned_by": "f5ai"},
        {"id": "o1-mini", "object": "model", "created": 0, "owned_by": "f5ai"},
    ],
}


def backend_routes(content="Full response text", model="gpt-4o"):
    return {
        "chat/completions": lambda request: httpx.Response(
            200, json=chat_completion_payload(content, model=model)
        ),
        "models": lambda request: httpx.Response(200, json=MODELS_PAYLOAD),
    }


def sdk_backed_api(config, transport):
    """F5AIApi whose OpenAI SDK client talks to a mock transport."""
    client = AsyncOpenAI(
        api_key=config.api_key,
        base_url=config.api_base,
        http_client=httpx.AsyncClient(transport=transport),
        max_retries=0,
    )
    return F5AIApi(config=config, client=client)


@pytest.mark.integration
class TestEndToEnd:
    """Full request/response cycles against a mocked backend."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("revision", [NormalizationRevision.CURRENT, NormalizationRevision.LEGACY])
    async def test_o1_mini_terse_request(self, revision):
        config = F5AIConfig(api_key="k", api_base=OFFICIAL_API_BASE, revision=revision)
        transport = RecordingTransport(backend_routes(model="o1-mini"))
        provider = F5AIProvider(config=config, http_client=httpx.AsyncClient(transport=transport))

        reply = await provider.chat(
            [ChatMessage(role="system", content="be terse")],
            CompletionOptions(model="o1-mini", max_tokens=500),
        )

        body = transport.bodies()[0]
        assert reply.content == "Full response text"
        assert all(message["role"] != "system" for message in body["messages"])
        assert body["max_completion_tokens"] == 500
        assert "max_tokens" not in body
        assert body["stream"] is False

    @pytest.mark.asyncio
    async def test_o1_mini_through_sdk(self):
        config = F5AIConfig(api_key="k")
        transport = RecordingTransport(backend_routes(model="o1-mini"))
        api = sdk_backed_api(config, transport)

        await api.chat_completion_non_stream({
            "model": "o1-mini",
            "messages": [{"role": "system", "content": "be terse"}],
            "max_tokens": 500,
        })

        request = transport.requests[0]
        body = json.loads(request.content)
        assert request.url.path == "/v1/chat/completions"
        assert body["messages"] == [{"role": "developer", "content": "be terse"}]
        assert body["max_completion_tokens"] == 500
        assert "max_tokens" not in body

    @pytest.mark.asyncio
    async def test_gpt_4o_stream_is_one_chunk(self):
        config = F5AIConfig(api_key="k")
        transport = RecordingTransport(backend_routes("The whole answer, at once."))
        api = sdk_backed_api(config, transport)

        chunks = [chunk async for chunk in api.chat_completion_stream({
            "model": "gpt-4o",
            "messages": [{"role": "user", "content": "Tell me everything"}],
            "stream": True,
        })]

        assert len(chunks) == 1
        assert chunks[0].choices[0].delta.content == "The whole answer, at once."
        assert json.loads(transport.requests[0].content)["stream"] is False

    @pytest.mark.asyncio
    async def test_gpt_4o_provider_stream_is_one_message(self):
        config = F5AIConfig(api_key="k")
        transport = RecordingTransport(backend_routes("The whole answer, at once."))
        provider = F5AIProvider(config=config, http_client=httpx.AsyncClient(transport=transport))

        messages = [m async for m in provider.stream_chat(
            [ChatMessage(role="user", content="Tell me everything")],
            CompletionOptions(model="gpt-4o", stream=True),
        )]

        assert [m.content for m in messages] == ["The whole answer, at once."]

    @pytest.mark.asyncio
    async def test_list_models_order(self):
        config = F5AIConfig(api_key="k")
        expected = [model["id"] for model in MODELS_PAYLOAD["data"]]

        provider = F5AIProvider(
            config=config,
            http_client=httpx.AsyncClient(transport=RecordingTransport(backend_routes())),
        )
        api = sdk_backed_api(config, RecordingTransport(backend_routes()))

        assert await provider.list_models() == expected
        assert [model.id for model in await api.list()] == expected
