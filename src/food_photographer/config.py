"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

AiBackend = Literal["gemini", "openai"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ai_backend: AiBackend = "gemini"
    gemini_api_key: str | None = None
    gemini_text_model: str = "gemini-2.5-flash"
    gemini_image_model: str = "imagen-4.0-generate-001"
    gemini_edit_model: str = "gemini-2.5-flash-image"
    openai_api_key: str | None = None
    openai_text_model: str = "gpt-5.2"
    openai_image_model: str = "gpt-image-1"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    parse_timeout_seconds: float = 60.0
    generation_timeout_seconds: float = 120.0
    edit_timeout_seconds: float = 120.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def api_key_env_var(self) -> str:
        """Return the environment variable holding the selected backend's key."""
        return f"{self.ai_backend.upper()}_API_KEY"

    def api_key_for_backend(self) -> str | None:
        """Return the selected backend's API key; blank values count as unset."""
        if self.ai_backend == "gemini":
            raw = self.gemini_api_key
        else:
            raw = self.openai_api_key
        if raw is None or not raw.strip():
            return None
        return raw.strip()
