"""Shared pytest fixtures for F5AI LLM SDK tests."""

import pytest
import httpx

from f5ai_llm_sdk.config.constants import DEV_API_BASE, OFFICIAL_API_BASE
from f5ai_llm_sdk.config.settings import F5AIConfig
from f5ai_llm_sdk.models.conversation_types import ChatMessage
from f5ai_llm_sdk.providers.f5ai import F5AIProvider
from tests.helpers.http_mocks import RecordingTransport

F5AI_ENV_VARS = [
    "F5AI_API_BASE",
    "F5AI_API_KEY",
    "F5AI_API_TYPE",
    "F5AI_DEPLOYMENT",
    "F5AI_API_VERSION",
    "F5AI_USE_LEGACY_COMPLETIONS",
    "F5AI_MAX_STOP_WORDS",
    "F5AI_MAX_EMBEDDING_BATCH_SIZE",
    "F5AI_EMBEDDING_MODEL",
    "F5AI_NORMALIZATION_REVISION",
    "F5AI_O_SERIES_INSTRUCTIONS",
    "F5AI_TIMEOUT",
]


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "integration: tests crossing several layers")
    config.addinivalue_line("markers", "slow: slow tests")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every F5AI_* variable so tests see only what they set."""
    for name in F5AI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_env_vars(clean_env):
    """Mock environment variables for testing."""
    env_vars = {
        "F5AI_API_KEY": "test-f5ai-key",
        "F5AI_API_BASE": OFFICIAL_API_BASE,
    }
    for key, value in env_vars.items():
        clean_env.setenv(key, value)
    return env_vars


@pytest.fixture
def official_config():
    """Settings for the official endpoint."""
    return F5AIConfig(api_key="test-key", api_base=OFFICIAL_API_BASE)


@pytest.fixture
def dev_config():
    """Settings for the dev endpoint, which caps stop words at 4."""
    return F5AIConfig(api_key="test-key", api_base=DEV_API_BASE)


@pytest.fixture
def sample_messages():
    """Sample conversation with a system prompt."""
    return [
        ChatMessage(role="system", content="be terse"),
        ChatMessage(role="user", content="Hello"),
    ]


@pytest.fixture
def weather_tool():
    """Sample tool definition."""
    return {
        "type": "function",
        "function": {
            "name": "get_weather",
            "description": "Get the weather for a city",
            "parameters": {
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"],
            },
        },
    }


@pytest.fixture
def make_provider():
    """Build an F5AIProvider whose HTTP client is served by a RecordingTransport."""
    def factory(config, routes):
        transport = RecordingTransport(routes)
        client = httpx.AsyncClient(transport=transport)
        return F5AIProvider(config=config, http_client=client), transport

    return factory
