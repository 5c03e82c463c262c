from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Operator identity
    official_email: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    log_format: str = "json"
    max_body_bytes: int = 64 * 1024

    # Rate limiting
    rate_limit_rpm: int = 60

    # Upstream text generation
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout_seconds: float = 15.0

    @field_validator("official_email", "openai_api_key")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @field_validator("rate_limit_rpm")
    @classmethod
    def floor_rate_limit(cls, v: int) -> int:
        """A limit below one request per minute would lock every client out."""
        return max(1, v)


@lru_cache
def get_settings() -> Settings:
    return Settings()
