"""Pytest fixtures and configuration."""

import base64
import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from src.viaticos.config import ViaticosSettings, get_settings
from src.viaticos.llm.base import ContentPart, LLMClient, MediaPart, TextPart
from src.clients.expenses.extraction import ReceiptExtractor
from src.clients.expenses.schemas import ReceiptUpload

# Project root (parent of tests/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

RESTAURANT_JSON = {
    "vendor": "Restaurante La Capital",
    "date": "2024-05-10",
    "totalAmount": 850.50,
    "currency": "MXN",
    "category": "Meals",
}


class FakeLLM(LLMClient):
    """In-memory LLM seam: records every call and answers through a handler.

    The handler receives the content parts and returns response text or raises.
    Default handler returns RESTAURANT_JSON.
    """

    def __init__(self, handler: Optional[Callable[[list[ContentPart]], str]] = None):
        self._handler = handler or (lambda parts: json.dumps(RESTAURANT_JSON))
        self.calls: list[tuple[list[ContentPart], dict[str, Any]]] = []

    def generate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        self.calls.append((parts, schema))
        return self._handler(parts)


def media_content(parts: list[ContentPart]) -> bytes:
    """Decoded bytes of the first media part (b"" for text-only requests)."""
    media = next((p for p in parts if isinstance(p, MediaPart)), None)
    return base64.b64decode(media.data) if media else b""


def text_content(parts: list[ContentPart]) -> str:
    return "\n".join(p.text for p in parts if isinstance(p, TextPart))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def settings() -> ViaticosSettings:
    """Settings with a dummy key; never loads .env."""
    return ViaticosSettings(_env_file=None, GOOGLE_API_KEY="test-key")


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def extractor(fake_llm, settings) -> ReceiptExtractor:
    return ReceiptExtractor(llm=fake_llm, settings=settings)


@pytest.fixture
def make_upload() -> Callable[..., ReceiptUpload]:
    def _make(name: str = "comida.jpg", mime_type: str = "image/jpeg", content: bytes = b"\xff\xd8jpeg-bytes"):
        return ReceiptUpload(name=name, mime_type=mime_type, content=content)
    return _make
