"""Chat backends: live Claude replies or offline mock replies."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from econirvana.chat import mock
from econirvana.chat.client import LiveModelClient
from econirvana.config import settings as default_settings

if TYPE_CHECKING:
    from econirvana.config import Settings

logger = logging.getLogger(__name__)


class ChatBackend(ABC):
    """Strategy for turning a conversation into an assistant reply."""

    name: str

    @abstractmethod
    async def reply(self, messages: list[dict[str, Any]]) -> str:
        """Return the assistant's reply to the last user message.

        Raises ``ChatBackendError`` when no reply can be produced.
        """


class LiveBackend(ChatBackend):
    name = "live"

    def __init__(self, client: LiveModelClient | None = None) -> None:
        self.client = client or LiveModelClient()

    async def reply(self, messages: list[dict[str, Any]]) -> str:
        return await self.client.complete(messages)


class MockBackend(ChatBackend):
    """Keyword-matched canned replies after a simulated network delay."""

    name = "mock"

    def __init__(self, delay: float | None = None) -> None:
        self.delay = default_settings.mock_reply_delay_seconds if delay is None else delay

    async def reply(self, messages: list[dict[str, Any]]) -> str:
        prompt = ""
        for message in reversed(messages):
            if message.get("role") == "user" and isinstance(message.get("content"), str):
                prompt = message["content"]
                break
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return mock.resolve(prompt)


def select_backend(settings: Settings | None = None) -> ChatBackend:
    """Pick the primary backend for the given configuration.

    Mock when offline mode is on, or when there is no API key and failures
    would degrade to mock replies anyway. Otherwise live, even without a
    key, so a misconfigured production deployment fails loudly.
    """
    settings = settings or default_settings
    if settings.offline_mode:
        logger.info("Chat backend: mock (offline mode)")
        return MockBackend(delay=settings.mock_reply_delay_seconds)
    if not settings.anthropic_api_key:
        if settings.permissive_fallback:
            logger.warning("Chat backend: mock (ANTHROPIC_API_KEY is not set)")
            return MockBackend(delay=settings.mock_reply_delay_seconds)
        logger.warning("Chat backend: live, but ANTHROPIC_API_KEY is not set")
    else:
        logger.info("Chat backend: live (%s)", settings.chat_model)
    return LiveBackend(
        LiveModelClient(
            api_key=settings.anthropic_api_key,
            model=settings.chat_model,
            max_tokens=settings.chat_max_tokens,
            temperature=settings.chat_temperature,
        )
    )
