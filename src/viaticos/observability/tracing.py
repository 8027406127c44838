"""LLM call tracing: log operation, latency, and prompt/response sizes."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..llm.base import ContentPart, LLMClient, MediaPart, TextPart

logger = logging.getLogger(__name__)


@dataclass
class TraceEntry:
    """Single LLM call trace."""

    operation: str  # "generate_json" | "agenerate_json"
    part_count: int
    response: str
    latency_seconds: float
    prompt_length: int = 0
    media_bytes: int = 0  # base64 length of inline media parts
    response_length: int = 0
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


def _measure(parts: list[ContentPart]) -> tuple[int, int]:
    text_len = sum(len(p.text) for p in parts if isinstance(p, TextPart))
    media_len = sum(len(p.data) for p in parts if isinstance(p, MediaPart))
    return text_len, media_len


class TracingLLMClient(LLMClient):
    """Wraps an LLMClient and logs each call (latency, sizes, error type)."""

    def __init__(
        self,
        inner: LLMClient,
        log_level: int = logging.INFO,
        callback: Optional[Callable[[TraceEntry], None]] = None,
    ):
        self._inner = inner
        self._log_level = log_level
        self._callback = callback

    def generate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        start = time.perf_counter()
        response = ""
        error = None
        try:
            response = self._inner.generate_json(parts, schema, **kwargs)
            return response
        except Exception as e:
            error = type(e).__name__
            raise
        finally:
            self._emit(self._entry("generate_json", parts, response, start, error, kwargs))

    async def agenerate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        start = time.perf_counter()
        response = ""
        error = None
        try:
            response = await self._inner.agenerate_json(parts, schema, **kwargs)
            return response
        except Exception as e:
            error = type(e).__name__
            raise
        finally:
            self._emit(self._entry("agenerate_json", parts, response, start, error, kwargs))

    @staticmethod
    def _entry(
        operation: str,
        parts: list[ContentPart],
        response: str,
        start: float,
        error: Optional[str],
        kwargs: dict[str, Any],
    ) -> TraceEntry:
        text_len, media_len = _measure(parts)
        return TraceEntry(
            operation=operation,
            part_count=len(parts),
            response=response,
            latency_seconds=time.perf_counter() - start,
            prompt_length=text_len,
            media_bytes=media_len,
            response_length=len(response),
            error=error,
            metadata=dict(kwargs),
        )

    def _emit(self, entry: TraceEntry) -> None:
        logger.log(
            self._log_level,
            "LLM trace | op=%s latency=%.3fs parts=%s prompt_len=%s media_len=%s response_len=%s error=%s",
            entry.operation,
            entry.latency_seconds,
            entry.part_count,
            entry.prompt_length,
            entry.media_bytes,
            entry.response_length,
            entry.error,
        )
        if self._callback:
            try:
                self._callback(entry)
            except Exception as e:
                logger.warning("Tracing callback failed: %s", e)
