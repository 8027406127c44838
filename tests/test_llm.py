"""Tests for the LLM seam: base helpers, Gemini provider, registry, factory."""

from unittest.mock import MagicMock, patch

import pytest

from src.viaticos.config import ViaticosSettings
from src.viaticos.deps import _get_llm_cached, get_llm
from src.viaticos.exceptions import APIKeyError, ProviderNotFoundError
from src.viaticos.llm.base import LLMClient, MediaPart, TextPart
from src.viaticos.llm.gemini_provider import GeminiLLMProvider, _content_text, _to_message
from src.viaticos.llm.registry import LLMProviderRegistry
from src.viaticos.observability.tracing import TracingLLMClient

SCHEMA = {"type": "object", "properties": {"vendor": {"type": "string"}}, "required": ["vendor"]}


class EchoLLM(LLMClient):
    def generate_json(self, parts, schema, **kwargs):
        return '{"vendor": "echo"}'


def test_agenerate_json_default_runs_sync_call():
    """Default agenerate_json delegates to generate_json."""
    import asyncio

    result = asyncio.run(EchoLLM().agenerate_json([TextPart(text="hi")], SCHEMA))
    assert result == '{"vendor": "echo"}'


def test_to_message_preserves_part_order():
    """Media parts become media blocks with their declared MIME type, text parts stay text, order kept."""
    message = _to_message([MediaPart(data="QUJD", mime_type="application/pdf"), TextPart(text="extract")])
    assert message.content == [
        {"type": "media", "mime_type": "application/pdf", "data": b"ABC"},
        {"type": "text", "text": "extract"},
    ]


def test_content_text_handles_string_and_blocks():
    assert _content_text(MagicMock(content='{"a": 1}')) == '{"a": 1}'
    blocks = MagicMock(content=[{"type": "text", "text": '{"a":'}, {"type": "text", "text": " 1}"}])
    assert _content_text(blocks) == '{"a": 1}'


def test_gemini_provider_requests_json_with_schema():
    """GeminiLLMProvider builds a JSON-mode chat model per schema and returns stripped text."""
    with patch("langchain_google_genai.ChatGoogleGenerativeAI") as chat_cls:
        chat_cls.return_value.invoke.return_value = MagicMock(content='  {"vendor": "Uber"}\n')
        provider = GeminiLLMProvider(api_key="k", model="gemini-2.5-flash", temperature=0.0)
        out = provider.generate_json([TextPart(text="receipt")], SCHEMA)
        provider.generate_json([TextPart(text="again")], SCHEMA)

    assert out == '{"vendor": "Uber"}'
    chat_cls.assert_called_once()
    kwargs = chat_cls.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["google_api_key"] == "k"
    assert kwargs["response_mime_type"] == "application/json"
    assert kwargs["response_schema"] == SCHEMA
    assert chat_cls.return_value.invoke.call_count == 2


def test_registry_unknown_provider():
    with pytest.raises(ProviderNotFoundError) as exc:
        LLMProviderRegistry.create(provider="nope", api_key="k")
    assert "gemini" in exc.value.available


def test_registry_gemini_requires_key():
    with pytest.raises(APIKeyError) as exc:
        LLMProviderRegistry.create(provider="gemini", api_key=None)
    assert exc.value.env_var == "GOOGLE_API_KEY"


def test_registry_register_custom_provider():
    @LLMProviderRegistry.register("Echo")
    def create_echo(api_key, model, temperature, **kwargs):
        return EchoLLM()

    try:
        assert LLMProviderRegistry.is_registered("echo")
        assert isinstance(LLMProviderRegistry.create(provider="echo"), EchoLLM)
    finally:
        LLMProviderRegistry.unregister("echo")
    assert not LLMProviderRegistry.is_registered("echo")


def test_get_llm_wraps_with_tracing_when_enabled():
    @LLMProviderRegistry.register("echo")
    def create_echo(api_key, model, temperature, **kwargs):
        return EchoLLM()

    try:
        plain = get_llm(ViaticosSettings(_env_file=None, LLM_PROVIDER="echo"))
        traced = get_llm(ViaticosSettings(_env_file=None, LLM_PROVIDER="echo", ENABLE_LLM_TRACING=True))
    finally:
        LLMProviderRegistry.unregister("echo")
        _get_llm_cached.cache_clear()
    assert isinstance(plain, EchoLLM)
    assert isinstance(traced, TracingLLMClient)
