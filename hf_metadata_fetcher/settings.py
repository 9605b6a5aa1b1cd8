"""Client settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_ENDPOINT


class Settings(BaseSettings):
    """Settings for the hub metadata client.

    Field names map to the conventional Hugging Face environment variables
    (HF_ENDPOINT, HF_DOWNLOAD_BASE, HF_REQUEST_TIMEOUT).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    hf_endpoint: str = DEFAULT_ENDPOINT
    hf_download_base: Path = Path.home() / "Documents" / "huggingface"
    hf_request_timeout: float = 30.0


class TokenSettings(BaseSettings):
    """Token sources taken from the process environment.

    A .env file is never consulted here; it would otherwise outrank the
    token files and break the source priority order.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        env_ignore_empty=True,
        extra="ignore",
    )

    hf_token: str | None = None
    hugging_face_hub_token: str | None = None
    hf_token_path: str | None = None
    hf_home: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
