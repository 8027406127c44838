"""Name-to-factory registry for receipt extraction LLM clients.

The configured provider (``LLM_PROVIDER``) is looked up by name. Tests and
alternative backends plug in by registering a factory:

    @LLMProviderRegistry.register("fake")
    def create_fake(api_key, model, temperature, **kwargs):
        return FakeLLM()

Built in: ``gemini`` (needs GOOGLE_API_KEY).
"""

from typing import Any, Callable, Dict, Optional

from ..exceptions import APIKeyError, ProviderNotFoundError
from .base import LLMClient


class LLMProviderRegistry:
    """Registry for LLM provider factories."""

    _providers: Dict[str, Callable[..., LLMClient]] = {}

    @classmethod
    def register(cls, name: str) -> Callable:
        """Register a provider factory function under ``name`` (case-insensitive)."""
        def decorator(factory: Callable[..., LLMClient]) -> Callable[..., LLMClient]:
            cls._providers[name.lower().strip()] = factory
            return factory
        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._providers.pop(name.lower().strip(), None)

    @classmethod
    def create(
        cls,
        provider: str,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        **kwargs: Any
    ) -> LLMClient:
        """Create an LLM client instance for the given provider.

        Raises:
            ProviderNotFoundError: If provider is not registered
            APIKeyError: If the provider factory requires a key and none was given
        """
        provider = (provider or "gemini").lower().strip()
        if provider not in cls._providers:
            raise ProviderNotFoundError(provider, cls.list_providers())
        factory = cls._providers[provider]
        return factory(api_key=api_key, model=model, temperature=temperature, **kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        return sorted(cls._providers.keys())

    @classmethod
    def is_registered(cls, provider: str) -> bool:
        return provider.lower().strip() in cls._providers


def _register_builtin_providers():
    """Register built-in LLM providers."""
    from .gemini_provider import GeminiLLMProvider

    @LLMProviderRegistry.register("gemini")
    def create_gemini(api_key: Optional[str], model: str, temperature: float, **kwargs):
        if not api_key:
            raise APIKeyError("Gemini", "GOOGLE_API_KEY")
        return GeminiLLMProvider(api_key=api_key, model=model, temperature=temperature)


_register_builtin_providers()
