"""LLM client factory: provider selection, caching, and optional tracing wrapper."""

import logging
from functools import lru_cache

from .config import ViaticosSettings
from .llm.base import LLMClient
from .llm.registry import LLMProviderRegistry
from .observability.tracing import TracingLLMClient


@lru_cache
def _get_llm_cached(
    provider: str,
    api_key: str | None,
    model: str,
    temperature: float,
) -> LLMClient:
    """Cached provider factory; avoids recreating clients with the same parameters."""
    return LLMProviderRegistry.create(
        provider=provider,
        api_key=api_key,
        model=model,
        temperature=temperature,
    )


def get_llm(settings: ViaticosSettings) -> LLMClient:
    """Return the configured LLM client, wrapped with TracingLLMClient when tracing is enabled.

    Raises:
        APIKeyError: If the provider needs GOOGLE_API_KEY and it is not set
        ProviderNotFoundError: If LLM_PROVIDER is not registered
    """
    provider = (settings.LLM_PROVIDER or "gemini").lower().strip()
    llm = _get_llm_cached(
        provider=provider,
        api_key=settings.GOOGLE_API_KEY,
        model=settings.LLM_MODEL,
        temperature=settings.TEMPERATURE,
    )
    if settings.ENABLE_LLM_TRACING:
        level = getattr(logging, (settings.TRACING_LOG_LEVEL or "INFO").upper(), logging.INFO)
        llm = TracingLLMClient(llm, log_level=level)
    return llm
