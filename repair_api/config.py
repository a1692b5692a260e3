"""Configuration module for the repair assistant API.

All settings come from environment variables (or a local ``.env``) so
that API keys are never hardcoded in the codebase.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # API Metadata
    app_name: str = "Repair Assistant API"
    app_version: str = "0.1.0"
    debug_mode: bool = False

    # LLM Configuration (any OpenAI-compatible endpoint; Groq by default)
    llm_endpoint: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Base URL of the OpenAI-compatible chat completions API",
    )
    llm_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GROQ_API_KEY", "LLM_API_KEY"),
        description="Bearer token for the LLM provider",
    )
    llm_model: str = Field(default="llama-3.3-70b-versatile")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_timeout_seconds: float = Field(
        default=60.0, gt=0, description="Per-request timeout for LLM calls"
    )
    llm_json_mode: bool = Field(
        default=True,
        description="Ask the provider for response_format=json_object",
    )

    # Guide enrichment
    suggest_parts: bool = Field(
        default=True,
        description="Ask the model for likely parts when a trouble code is given",
    )
    max_video_links: int = Field(default=3, ge=0)

    # HTTP
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://127.0.0.1:3000", "http://localhost:3000"]
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="console",
        description="Log output format: 'console' or 'json'",
    )

    @property
    def has_llm_credentials(self) -> bool:
        """Return ``True`` when an API key is configured."""
        return bool(self.llm_api_key and self.llm_api_key.strip())


# Global settings instance
settings = Settings()
