"""Mocked account flow: login, signup and logout over local storage.

There is no real backend. Login accepts a single demo credential pair and
signup accepts any complete form. This is a placeholder, not a security
boundary: passwords are neither hashed nor stored.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import string

from pydantic import ValidationError

from econirvana.auth.models import User
from econirvana.config import settings
from econirvana.storage import LocalStorage

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password123"
DEMO_USER_ID = "1"
DEMO_USER_NAME = "Demo User"

INVALID_CREDENTIALS = "Invalid email or password"
MISSING_FIELDS = "Please fill in all fields"
LOGIN_FAILED = "An error occurred during login"
SIGNUP_FAILED = "An error occurred during signup"

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9


def generate_user_id() -> str:
    """Random 9-character base-36 identifier for new accounts."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class AuthService:
    """Holds the single signed-in user and keeps local storage in step.

    Singleton accessed via ``AuthService.get()``. Every state change writes
    storage first and only then updates ``user``, so the two never disagree
    after an operation returns.
    """

    _instance: AuthService | None = None

    def __init__(
        self,
        storage: LocalStorage | None = None,
        *,
        delay: float | None = None,
        storage_key: str | None = None,
    ) -> None:
        self._storage = storage or LocalStorage.get()
        self.delay = settings.auth_delay_seconds if delay is None else delay
        self.storage_key = storage_key or settings.storage_user_key
        self.user: User | None = None
        self.loading = True
        self.error: str | None = None

    @classmethod
    def get(cls) -> AuthService:
        """Return the shared AuthService instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    async def restore(self) -> User | None:
        """Load the persisted user, if any. Called once at startup."""
        raw = await self._storage.get_item(self.storage_key)
        if raw:
            try:
                self.user = User.model_validate_json(raw)
                logger.info("Restored session for %s", self.user.email)
            except ValidationError:
                logger.warning("Discarding unreadable stored user record")
                await self._storage.remove_item(self.storage_key)
                self.user = None
        self.loading = False
        return self.user

    async def _simulate_latency(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    async def _persist(self, user: User) -> None:
        await self._storage.set_item(self.storage_key, user.model_dump_json())
        self.user = user

    async def login(self, email: str, password: str) -> bool:
        """Sign in with the demo account. Returns True on success."""
        self.error = None
        self.loading = True
        try:
            await self._simulate_latency()
            if email != DEMO_EMAIL or password != DEMO_PASSWORD:
                logger.info("Login rejected for %s", email or "<empty>")
                self.error = INVALID_CREDENTIALS
                return False
            await self._persist(User(id=DEMO_USER_ID, name=DEMO_USER_NAME, email=email))
            logger.info("Login: %s", email)
            return True
        except Exception:
            logger.exception("Login failed")
            self.error = LOGIN_FAILED
            return False
        finally:
            self.loading = False

    async def signup(self, name: str, email: str, password: str) -> bool:
        """Create an account from a complete form. Returns True on success."""
        self.error = None
        self.loading = True
        try:
            await self._simulate_latency()
            if not (name and email and password):
                self.error = MISSING_FIELDS
                return False
            await self._persist(User(id=generate_user_id(), name=name, email=email))
            logger.info("Signup: %s", email)
            return True
        except Exception:
            logger.exception("Signup failed")
            self.error = SIGNUP_FAILED
            return False
        finally:
            self.loading = False

    async def logout(self) -> None:
        """Forget the current user and its persisted record."""
        await self._storage.remove_item(self.storage_key)
        if self.user is not None:
            logger.info("Logout: %s", self.user.email)
        self.user = None
        self.error = None
