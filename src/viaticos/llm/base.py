"""Abstract multimodal LLM client interface."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TextPart:
    """Plain text content part (instructions, inlined XML)."""

    text: str


@dataclass(frozen=True)
class MediaPart:
    """Inline binary content part: base64 data tagged with its MIME type."""

    data: str
    mime_type: str


ContentPart = Union[TextPart, MediaPart]


class LLMClient(ABC):
    """Abstract interface for LLM providers that return schema-constrained JSON."""

    @abstractmethod
    def generate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        """Send content parts and return the raw response text (expected to be a JSON object matching schema)."""
        ...

    async def agenerate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        """Async variant. Default: run generate_json in a worker thread. Override for native async clients."""
        return await asyncio.to_thread(self.generate_json, parts, schema, **kwargs)
