from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "WhatsApp Chat Digest API"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-2024-08-06"
    summary_max_tokens: int = 16384

    max_prompt_tokens: int = 128_000
    token_counter: Literal["approximate", "tiktoken"] = "approximate"
    tokenizer_model: str = "gpt-4"
    recency_window_days: int = 7

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    max_upload_size_mb: int = 15
    rate_limit_per_minute: int = 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
