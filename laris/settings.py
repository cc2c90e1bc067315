# laris/settings.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tool knobs, read from LARIS_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="LARIS_", extra="ignore")

    PHP_BIN: str = "php"
    # Seconds before an artisan/php subprocess is abandoned
    COMMAND_TIMEOUT: float = 60.0

    OPENROUTER_URL: str = "https://openrouter.ai/api/v1/chat/completions"
    LLM_TIMEOUT: float = 120.0
    LLM_MAX_RETRIES: int = 2
    LLM_BACKOFF_S: float = 2.0

    AUDIT_LOG: str = "~/.laris/audit.log.jsonl"


def get_settings() -> Settings:
    return Settings()
