"""Async Claude API client for EcoBot's live replies."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from econirvana.chat.prompt import build_system_prompt
from econirvana.config import settings

logger = logging.getLogger(__name__)


class ChatBackendError(Exception):
    """Raised when a chat backend cannot produce a reply."""


class MissingCredentialsError(ChatBackendError):
    """No API key is configured for the live model."""


class ModelNetworkError(ChatBackendError):
    """The model endpoint could not be reached."""


class ModelProviderError(ChatBackendError):
    """The provider answered with an error or without any text."""


class LiveModelClient:
    """Single-shot Claude call with the knowledge snapshot as system prompt.

    No tools, no streaming, no retries. Every failure surfaces as a
    ``ChatBackendError`` subclass so callers can tell them apart.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._api_key = settings.anthropic_api_key if api_key is None else api_key
        self.model = model or settings.chat_model
        self.max_tokens = max_tokens or settings.chat_max_tokens
        self.temperature = settings.chat_temperature if temperature is None else temperature
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._api_key) or self._client is not None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Lazily initialize the Anthropic client."""
        if self._client is None:
            if not self._api_key:
                msg = "ANTHROPIC_API_KEY is not set"
                raise MissingCredentialsError(msg)
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key, max_retries=0)
        return self._client

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        """Send the conversation and return the reply text verbatim.

        Args:
            messages: Conversation history in Claude API message format,
                ending with the user's latest message.

        Raises:
            MissingCredentialsError: No API key configured.
            ModelNetworkError: Connection failure or timeout.
            ModelProviderError: API error status, an unreadable response or
                an empty reply.
        """
        client = self._get_client()
        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=build_system_prompt(),
                messages=messages,
            )
        except anthropic.APIConnectionError as exc:
            raise ModelNetworkError(str(exc)) from exc
        except anthropic.APIStatusError as exc:
            msg = f"Model API returned {exc.status_code}: {exc.message}"
            raise ModelProviderError(msg) from exc
        except anthropic.APIError as exc:
            raise ModelProviderError(f"Model API error: {exc.message}") from exc

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            msg = f"Model returned no text (stop_reason={response.stop_reason})"
            raise ModelProviderError(msg)

        logger.info("Live reply: model=%s, %d chars", self.model, len(text))
        return text
