"""
Chord Bridge configuration.

Values come from ``CHORD_BRIDGE_*`` environment variables or a local ``.env``
file. The API key is also accepted as a plain ``OPENAI_API_KEY``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

try:
    from constants import (
        DEFAULT_BPM,
        DEFAULT_MODEL_NAME,
        DEFAULT_PROVIDER,
        DEFAULT_TEMPERATURE,
        HTTP_TIMEOUT_SEC,
        ProviderName,
    )
except ImportError:
    from .constants import (
        DEFAULT_BPM,
        DEFAULT_MODEL_NAME,
        DEFAULT_PROVIDER,
        DEFAULT_TEMPERATURE,
        HTTP_TIMEOUT_SEC,
        ProviderName,
    )


class Settings(BaseSettings):
    """Settings injected into the progression requester."""

    provider: ProviderName = DEFAULT_PROVIDER
    model_name: str = DEFAULT_MODEL_NAME
    # Empty means: use the provider's default endpoint
    base_url: Optional[str] = None
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CHORD_BRIDGE_API_KEY", "OPENAI_API_KEY"),
    )
    temperature: float = DEFAULT_TEMPERATURE
    default_bpm: float = Field(default=DEFAULT_BPM, gt=0)
    http_timeout_sec: float = Field(default=HTTP_TIMEOUT_SEC, gt=0)
    # Strip markdown fences and surrounding prose before parsing model output
    lenient_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CHORD_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
