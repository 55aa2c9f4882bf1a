"""Tests for the live Claude client."""

from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from econirvana.chat.client import (
    ChatBackendError,
    LiveModelClient,
    MissingCredentialsError,
    ModelNetworkError,
    ModelProviderError,
)
from econirvana.chat.prompt import load_knowledge

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _text_block(text: str) -> MagicMock:
    block = MagicMock()
    block.type = "text"
    block.text = text
    return block


def _client_returning(*blocks, stop_reason: str = "end_turn") -> MagicMock:
    response = MagicMock()
    response.content = list(blocks)
    response.stop_reason = stop_reason
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(return_value=response)
    return mock_client


def _client_raising(exc: Exception) -> MagicMock:
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(side_effect=exc)
    return mock_client


async def test_complete_returns_text_verbatim() -> None:
    mock_client = _client_returning(_text_block("  We accept laptops.  "))
    client = LiveModelClient(api_key="k", model="claude-test-model", client=mock_client)

    result = await client.complete([{"role": "user", "content": "laptops?"}])

    assert result == "  We accept laptops.  "
    mock_client.messages.create.assert_awaited_once()


async def test_complete_sends_knowledge_history_and_config() -> None:
    mock_client = _client_returning(_text_block("ok"))
    client = LiveModelClient(
        api_key="k",
        model="claude-test-model",
        max_tokens=321,
        temperature=0.5,
        client=mock_client,
    )
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": "where?"},
    ]

    await client.complete(history)

    kwargs = mock_client.messages.create.call_args.kwargs
    assert kwargs["messages"] == history
    assert kwargs["model"] == "claude-test-model"
    assert kwargs["max_tokens"] == 321
    assert kwargs["temperature"] == 0.5
    assert "EcoBot" in kwargs["system"]
    assert load_knowledge() in kwargs["system"]


async def test_complete_joins_multiple_text_blocks() -> None:
    other = MagicMock()
    other.type = "thinking"
    mock_client = _client_returning(_text_block("Part one. "), other, _text_block("Part two."))
    client = LiveModelClient(api_key="k", client=mock_client)

    assert await client.complete([{"role": "user", "content": "x"}]) == "Part one. Part two."


async def test_missing_api_key_raises_before_calling() -> None:
    client = LiveModelClient(api_key="")
    assert client.configured is False
    with pytest.raises(MissingCredentialsError):
        await client.complete([{"role": "user", "content": "hi"}])


async def test_connection_error_is_network_error() -> None:
    exc = anthropic.APIConnectionError(request=_REQUEST)
    client = LiveModelClient(api_key="k", client=_client_raising(exc))
    with pytest.raises(ModelNetworkError):
        await client.complete([{"role": "user", "content": "hi"}])


async def test_timeout_is_network_error() -> None:
    exc = anthropic.APITimeoutError(request=_REQUEST)
    client = LiveModelClient(api_key="k", client=_client_raising(exc))
    with pytest.raises(ModelNetworkError):
        await client.complete([{"role": "user", "content": "hi"}])


async def test_response_validation_error_is_provider_error() -> None:
    response = httpx.Response(200, request=_REQUEST)
    exc = anthropic.APIResponseValidationError(response=response, body={"content": None})
    client = LiveModelClient(api_key="k", client=_client_raising(exc))
    with pytest.raises(ModelProviderError):
        await client.complete([{"role": "user", "content": "hi"}])


async def test_status_error_is_provider_error() -> None:
    response = httpx.Response(529, request=_REQUEST)
    exc = anthropic.APIStatusError("overloaded", response=response, body=None)
    client = LiveModelClient(api_key="k", client=_client_raising(exc))
    with pytest.raises(ModelProviderError, match="529"):
        await client.complete([{"role": "user", "content": "hi"}])


async def test_empty_reply_is_provider_error() -> None:
    client = LiveModelClient(api_key="k", client=_client_returning(stop_reason="max_tokens"))
    with pytest.raises(ModelProviderError, match="no text"):
        await client.complete([{"role": "user", "content": "hi"}])


def test_errors_share_a_base() -> None:
    for cls in (MissingCredentialsError, ModelNetworkError, ModelProviderError):
        assert issubclass(cls, ChatBackendError)
