"""LLM abstraction and providers."""

from .base import ContentPart, LLMClient, MediaPart, TextPart
from .gemini_provider import GeminiLLMProvider
from .registry import LLMProviderRegistry

__all__ = [
    "ContentPart",
    "LLMClient",
    "MediaPart",
    "TextPart",
    "GeminiLLMProvider",
    "LLMProviderRegistry",
]
