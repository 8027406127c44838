"""Viaticos: receipt extraction and expense review building blocks.

This package holds the reusable, domain-agnostic pieces the expense flows
are built on:

- **config**: environment-driven settings (pydantic-settings)
- **llm/**: multimodal LLM seam with a Gemini provider and a provider registry
- **observability/**: LLM call tracing
- **utils/**: JSON extraction, date normalization, error classification

The expense-specific flows (extraction, batch submission, review) live in
``src.clients.expenses`` and use these components as a library.

Quick Start:
    ```python
    from src.viaticos.config import get_settings
    from src.viaticos.deps import get_llm
    from src.viaticos.llm import TextPart

    settings = get_settings()
    llm = get_llm(settings)
    raw = llm.generate_json([TextPart(text="Hello")], schema={"type": "object"})
    ```
"""

from .config import get_settings

__all__ = ["get_settings"]
