"""Application settings management leveraging pydantic v2."""

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if os.getenv("ENV", "development") in {"development", "dev", "local"}:
    # Containers should not rely on .env presence; load_dotenv is a no-op when missing.
    load_dotenv(override=False)


class AppSettings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    app_name: str = Field(
        default="Zensai",
        validation_alias=AliasChoices("APP_NAME", "ZENSAI_APP_NAME"),
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "ZENSAI_ENVIRONMENT"),
    )
    redis_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_URL", "ZENSAI_REDIS_URL"),
    )
    supabase_url: str = Field(
        default="http://localhost:54321",
        validation_alias=AliasChoices("SUPABASE_URL", "ZENSAI_SUPABASE_URL"),
    )
    supabase_service_key: str = Field(
        default="changeme",
        validation_alias=AliasChoices(
            "SUPABASE_SERVICE_KEY", "ZENSAI_SUPABASE_SERVICE_KEY"
        ),
    )
    photo_bucket: str = Field(
        default="journal-photos",
        validation_alias=AliasChoices("PHOTO_BUCKET", "ZENSAI_PHOTO_BUCKET"),
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "ZENSAI_OPENAI_API_KEY"),
    )
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENROUTER_API_KEY", "ZENSAI_OPENROUTER_API_KEY"),
    )
    llm_providers: str = Field(
        default="openai,openrouter",
        validation_alias=AliasChoices("LLM_PROVIDERS", "ZENSAI_LLM_PROVIDERS"),
    )
    model_chat: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("MODEL_CHAT", "ZENSAI_MODEL_CHAT"),
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "ZENSAI_LLM_TIMEOUT_SECONDS"),
    )
    llm_daily_budget: float | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_DAILY_BUDGET", "ZENSAI_LLM_DAILY_BUDGET"),
    )
    free_daily_limit: int = Field(
        default=2,
        validation_alias=AliasChoices("FREE_DAILY_LIMIT", "ZENSAI_FREE_DAILY_LIMIT"),
    )
    classifier_text_cap: int = Field(
        default=2000,
        validation_alias=AliasChoices("CLASSIFIER_TEXT_CAP", "ZENSAI_CLASSIFIER_TEXT_CAP"),
    )
    suggestion_min_chars: int = Field(
        default=20,
        validation_alias=AliasChoices("SUGGESTION_MIN_CHARS", "ZENSAI_SUGGESTION_MIN_CHARS"),
    )
    suggestion_debounce_seconds: float = Field(
        default=2.0,
        validation_alias=AliasChoices(
            "SUGGESTION_DEBOUNCE_SECONDS", "ZENSAI_SUGGESTION_DEBOUNCE_SECONDS"
        ),
    )
    confirmation_seconds: float = Field(
        default=3.0,
        validation_alias=AliasChoices("CONFIRMATION_SECONDS", "ZENSAI_CONFIRMATION_SECONDS"),
    )
    log_level: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LOG_LEVEL", "ZENSAI_LOG_LEVEL"),
    )
    log_format: str = Field(
        default="json",
        validation_alias=AliasChoices("LOG_FORMAT", "ZENSAI_LOG_FORMAT"),
    )

    model_config = SettingsConfigDict(
        env_file=(".env", "zensai/.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def provider_order(self) -> list[str]:
        """LLM provider keys in failover order."""

        return [item.strip() for item in self.llm_providers.split(",") if item.strip()]

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"local", "dev", "development", "test"}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Load environment variables and return a cached settings instance."""

    return AppSettings()


__all__ = ["AppSettings", "get_settings"]
