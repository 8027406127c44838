"""Shared configuration for the expense tooling."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ViaticosSettings(BaseSettings):
    """Application-wide settings."""

    # Gemini credential; API_KEY is accepted for compatibility with older deployments
    GOOGLE_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "API_KEY"),
    )

    # LLM provider: gemini (register others via LLMProviderRegistry)
    LLM_PROVIDER: str = "gemini"
    LLM_MODEL: str = "gemini-2.5-flash"
    TEMPERATURE: float = 0.0

    # Batch extraction: max simultaneous requests (0 = launch every file at once)
    EXTRACTION_MAX_CONCURRENCY: int = 0

    # File selection surface; MIME dispatch is still the authoritative gate
    ACCEPTED_EXTENSIONS: list[str] = [".xml", ".pdf", ".jpg", ".jpeg", ".png"]

    # Observability: LLM tracing (log op/latency/sizes)
    ENABLE_LLM_TRACING: bool = False
    TRACING_LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING

    LOG_LEVEL: str = "INFO"

    # UI: start the review session from the demo records
    LOAD_SEED_DATA: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def has_api_key(self) -> bool:
        return bool((self.GOOGLE_API_KEY or "").strip())


@lru_cache
def get_settings() -> ViaticosSettings:
    return ViaticosSettings()
