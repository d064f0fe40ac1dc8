"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SharedConfig(BaseSettings):
    """Base configuration shared across all services."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class SpecEngineConfig(SharedConfig):
    """Configuration for the Spec Engine service."""
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_model: str = Field(
        default="gpt-3.5-turbo", validation_alias="OPENAI_MODEL"
    )
    openai_base_url: str | None = Field(
        default=None, validation_alias="OPENAI_BASE_URL"
    )
    completion_timeout_seconds: float = Field(
        default=30.0, gt=0, validation_alias="COMPLETION_TIMEOUT_SECONDS"
    )
    completion_temperature: float = Field(
        default=0.2, ge=0, le=2, validation_alias="COMPLETION_TEMPERATURE"
    )
    completion_max_tokens: int = Field(
        default=1000, ge=1, validation_alias="COMPLETION_MAX_TOKENS"
    )
