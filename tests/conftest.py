"""Shared test fixtures."""

from pathlib import Path

import pytest

from econirvana.auth.service import AuthService
from econirvana.chat.backends import MockBackend
from econirvana.storage import LocalStorage


@pytest.fixture(autouse=False)
def _no_turso(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure tests use local file, not remote Turso."""
    monkeypatch.setattr("econirvana.config.settings.turso_database_url", "")


@pytest.fixture
def storage(tmp_path: Path, _no_turso: None) -> LocalStorage:
    """A LocalStorage backed by a temp database."""
    return LocalStorage(db_path=tmp_path / "test.db")


@pytest.fixture
def auth(storage: LocalStorage) -> AuthService:
    """An AuthService with no simulated latency."""
    return AuthService(storage=storage, delay=0)


@pytest.fixture
def mock_backend() -> MockBackend:
    return MockBackend(delay=0)
