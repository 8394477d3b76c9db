"""Tests for the OpenAI-compatible LLM client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from llm_data_analyzer.analyzer import AnalysisError, ConfigurationError
from llm_data_analyzer.config import EndpointConfig
from llm_data_analyzer.llm import LLMClient


def _endpoint(**overrides: object) -> EndpointConfig:
    values: dict[str, object] = {
        "name": "local",
        "endpoint_url": "http://localhost:8080/v1",
        "model": "test-model",
        "context_window_size": 4000,
        "chunk_size": 1000,
    }
    values.update(overrides)
    return EndpointConfig.model_validate(values)


def test_agent_uses_endpoint_and_model() -> None:
    """Test that the agent is built for the configured endpoint."""
    client = LLMClient("http://localhost:8080/v1/", "test-model", api_key="sk-test")
    agent = client._get_agent()

    assert client.endpoint_url == "http://localhost:8080/v1"
    assert agent.model.model_name == "test-model"
    assert client._get_agent() is agent


def test_missing_api_key_uses_placeholder() -> None:
    """Test that local endpoints without a key still get a client."""
    assert LLMClient("http://localhost:8080/v1", "m").api_key == "not-needed"


@pytest.mark.asyncio
async def test_analyze_returns_output() -> None:
    """Test that the reply text is returned."""
    client = LLMClient("http://localhost:8080/v1", "test-model")
    mock_agent = MagicMock()
    mock_agent.run = AsyncMock(return_value=MagicMock(output="hello"))

    with patch.object(client, "_get_agent", return_value=mock_agent):
        response = await client.analyze("prompt text")

    assert response == "hello"
    mock_agent.run.assert_awaited_once_with("prompt text")


@pytest.mark.asyncio
async def test_network_error_becomes_analysis_error() -> None:
    """Test that connection failures surface as AnalysisError."""
    client = LLMClient("http://localhost:8080/v1", "test-model")
    mock_agent = MagicMock()
    mock_agent.run = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

    with (
        patch.object(client, "_get_agent", return_value=mock_agent),
        pytest.raises(AnalysisError, match="connection refused") as exc_info,
    ):
        await client.analyze("prompt")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_model_error_becomes_analysis_error() -> None:
    """Test that malformed or rejected responses surface as AnalysisError."""
    from pydantic_ai.exceptions import UnexpectedModelBehavior  # noqa: PLC0415

    client = LLMClient("http://localhost:8080/v1", "test-model")
    mock_agent = MagicMock()
    mock_agent.run = AsyncMock(side_effect=UnexpectedModelBehavior("empty response"))

    with (
        patch.object(client, "_get_agent", return_value=mock_agent),
        pytest.raises(AnalysisError, match="LLM request failed"),
    ):
        await client.analyze("prompt")


@pytest.mark.asyncio
async def test_unexpected_error_becomes_analysis_error() -> None:
    """Test that any other failure is also reported as AnalysisError."""
    client = LLMClient("http://localhost:8080/v1", "test-model")
    mock_agent = MagicMock()
    mock_agent.run = AsyncMock(side_effect=ValueError("bad payload"))

    with (
        patch.object(client, "_get_agent", return_value=mock_agent),
        pytest.raises(AnalysisError, match="bad payload"),
    ):
        await client.analyze("prompt")


def test_from_endpoint_resolves_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the key is read from the configured variable."""
    monkeypatch.setenv("TEST_LLM_KEY", "sk-from-env")
    client = LLMClient.from_endpoint(_endpoint(api_key_env="TEST_LLM_KEY"), timeout=30)

    assert client.api_key == "sk-from-env"
    assert client.model == "test-model"
    assert client.timeout == 30


def test_from_endpoint_missing_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an unset key variable fails before any request."""
    monkeypatch.delenv("TEST_LLM_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        LLMClient.from_endpoint(_endpoint(api_key_env="TEST_LLM_KEY"))
