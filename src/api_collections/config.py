"""Configuration for API collection clients."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    api_base_url: str = Field(default="http://localhost:8000/api/v2")
    api_username: Optional[str] = Field(default=None)
    api_token: Optional[str] = Field(default=None)
    api_timeout_seconds: float = Field(default=20)
    api_verify_ssl: bool = Field(default=True)

    api_default_per_page: Optional[int] = Field(default=None)

    api_log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
