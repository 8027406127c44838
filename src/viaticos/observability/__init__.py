"""Observability: LLM tracing."""

from .tracing import TracingLLMClient, TraceEntry

__all__ = ["TracingLLMClient", "TraceEntry"]
