"""Tests for chat backend selection and the mock backend."""

from unittest.mock import AsyncMock, patch

from econirvana.chat import mock
from econirvana.chat.backends import LiveBackend, MockBackend, select_backend
from econirvana.config import Settings


class TestSelectBackend:
    def test_offline_mode_uses_mock(self):
        backend = select_backend(Settings(offline_mode=True, anthropic_api_key="k"))
        assert isinstance(backend, MockBackend)

    def test_offline_mode_applies_in_production_too(self):
        backend = select_backend(Settings(offline_mode=True, app_env="production"))
        assert isinstance(backend, MockBackend)

    def test_online_with_key_uses_live(self):
        settings = Settings(offline_mode=False, anthropic_api_key="k", chat_model="claude-x")
        backend = select_backend(settings)
        assert isinstance(backend, LiveBackend)
        assert backend.client.model == "claude-x"
        assert backend.client.configured is True

    def test_online_without_key_in_development_uses_mock(self):
        backend = select_backend(Settings(offline_mode=False, anthropic_api_key=""))
        assert isinstance(backend, MockBackend)

    def test_online_without_key_in_production_stays_live(self):
        settings = Settings(offline_mode=False, anthropic_api_key="", app_env="production")
        backend = select_backend(settings)
        assert isinstance(backend, LiveBackend)
        assert backend.client.configured is False

    def test_mock_delay_comes_from_settings(self):
        backend = select_backend(Settings(mock_reply_delay_seconds=0.25))
        assert backend.delay == 0.25


class TestMockBackend:
    async def test_answers_latest_user_message(self, mock_backend):
        history = [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": mock.GREETING_REPLY},
            {"role": "user", "content": "Where can I drop off?"},
        ]
        assert await mock_backend.reply(history) == mock.LOCATIONS_REPLY

    async def test_empty_history_gets_default(self, mock_backend):
        assert await mock_backend.reply([]) == mock.DEFAULT_REPLY

    async def test_simulates_latency(self):
        backend = MockBackend(delay=1.0)
        with patch("econirvana.chat.backends.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await backend.reply([{"role": "user", "content": "hi"}])
        sleep.assert_awaited_once_with(1.0)

    async def test_no_sleep_without_delay(self, mock_backend):
        with patch("econirvana.chat.backends.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await mock_backend.reply([{"role": "user", "content": "hi"}])
        sleep.assert_not_awaited()


async def test_live_backend_delegates_to_client():
    client = AsyncMock()
    client.complete.return_value = "live answer"
    backend = LiveBackend(client)
    history = [{"role": "user", "content": "hi"}]

    assert await backend.reply(history) == "live answer"
    client.complete.assert_awaited_once_with(history)
