"""In-memory chat session: the one entry point UI code talks to."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field

from econirvana.chat.backends import ChatBackend, MockBackend, select_backend
from econirvana.chat.client import ChatBackendError
from econirvana.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """A single conversation turn."""

    role: str  # "user" or "assistant"
    content: str


@dataclass
class ChatSession:
    """Conversation history plus the backend that answers it.

    When ``fallback`` is set, a failing primary backend is replaced by the
    mock backend for that message instead of raising. ``replied_by`` names
    the backend that produced the latest reply.
    """

    backend: ChatBackend = field(default_factory=select_backend)
    fallback: bool = field(default_factory=lambda: settings.permissive_fallback)
    messages: list[Message] = field(default_factory=list)
    window_size: int = field(default_factory=lambda: settings.conversation_window_size)
    fallback_backend: ChatBackend = field(default_factory=MockBackend)
    replied_by: str | None = field(default=None, init=False)

    def add(self, role: str, content: str) -> None:
        """Append a message and trim to the sliding window."""
        self.messages.append(Message(role=role, content=content))
        if len(self.messages) > self.window_size:
            self.messages = self.messages[-self.window_size :]
        # The API requires the history to open with a user turn.
        while self.messages and self.messages[0].role != "user":
            self.messages.pop(0)

    def reset(self) -> int:
        """Clear all messages. Returns the count of cleared messages."""
        count = len(self.messages)
        self.messages.clear()
        return count

    def to_api_messages(self) -> list[dict[str, str]]:
        """Format messages for the Claude API."""
        return [{"role": m.role, "content": m.content} for m in self.messages]

    async def send_message(self, text: str, *, remember: bool = True) -> str:
        """Send *text* and return the assistant's reply.

        The exchange is only recorded once a reply exists, so a propagated
        failure leaves the history untouched. Pass ``remember=False`` for
        one-off requests that should not enter the conversation.

        Raises:
            ChatBackendError: The primary backend failed and fallback is off.
        """
        history = [*self.to_api_messages(), {"role": "user", "content": text}]

        replier = self.backend
        try:
            reply = await replier.reply(history)
        except ChatBackendError as exc:
            if not self.fallback or isinstance(self.backend, MockBackend):
                logger.error("Chat reply failed (%s): %s", self.backend.name, exc)
                raise
            logger.warning(
                "Chat backend %s failed (%s: %s), using %s replies",
                self.backend.name,
                type(exc).__name__,
                exc,
                self.fallback_backend.name,
            )
            replier = self.fallback_backend
            reply = await replier.reply(history)

        self.replied_by = replier.name
        if remember:
            self.add("user", text)
            self.add("assistant", reply)
        return reply


# Global session store keyed by session ID (one per browser client).
# Least recently used sessions are evicted past ``chat_session_limit``.
_sessions: OrderedDict[str, ChatSession] = OrderedDict()


def get_chat_session(session_id: str, *, create: bool = True) -> ChatSession | None:
    """Get or create the chat session for a client.

    With ``create=False`` an unknown ID returns None instead of a new session.
    """
    chat = _sessions.get(session_id)
    if chat is not None:
        _sessions.move_to_end(session_id)
        return chat
    if not create:
        return None

    chat = _sessions[session_id] = ChatSession()
    while len(_sessions) > settings.chat_session_limit:
        evicted, _ = _sessions.popitem(last=False)
        logger.debug("Evicted idle chat session %s", evicted)
    return chat
