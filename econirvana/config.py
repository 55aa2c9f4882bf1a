"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """EcoNirvana configuration. All values come from environment variables."""

    # Runtime
    app_env: str = Field(default="development")
    offline_mode: bool = Field(default=True)
    chat_fallback: bool = Field(default=True)

    # Anthropic (live chat backend)
    anthropic_api_key: str = Field(default="")
    chat_model: str = Field(default="claude-sonnet-4-5-20250929")
    chat_max_tokens: int = Field(default=500)
    chat_temperature: float = Field(default=0.2)

    # Conversation
    conversation_window_size: int = Field(default=50)
    chat_session_limit: int = Field(default=1000)

    # Simulated latency for the mocked flows
    mock_reply_delay_seconds: float = Field(default=1.0)
    auth_delay_seconds: float = Field(default=1.0)
    contact_delay_seconds: float = Field(default=1.5)

    # Database (local storage stand-in)
    database_path: Path = Field(default=Path("data/econirvana.db"))

    # Turso (hosted libSQL); overrides database_path when set
    turso_database_url: str = Field(default="")
    turso_auth_token: str = Field(default="")

    storage_user_key: str = Field(default="user")

    # Web server
    web_host: str = Field(default="0.0.0.0")
    web_port: int = Field(default=8080)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @property
    def is_development(self) -> bool:
        return self.app_env.strip().lower() == "development"

    @property
    def permissive_fallback(self) -> bool:
        """True when live chat failures should degrade to mock replies."""
        return self.chat_fallback and self.is_development


settings = Settings()
