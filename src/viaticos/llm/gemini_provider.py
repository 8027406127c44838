"""Google Gemini LLM provider."""

import base64
import json
from typing import Any

from langchain_core.messages import HumanMessage

from .base import ContentPart, LLMClient, MediaPart, TextPart


def _to_message(parts: list[ContentPart]) -> HumanMessage:
    """Build one multimodal HumanMessage from content parts, preserving order.

    Media goes out as inline ``media`` blocks carrying the declared MIME type.
    """
    content: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, MediaPart):
            content.append(
                {"type": "media", "mime_type": part.mime_type, "data": base64.b64decode(part.data)}
            )
        else:
            content.append({"type": "text", "text": part.text})
    return HumanMessage(content=content)


def _content_text(response: Any) -> str:
    """Return the text of a chat response whose content may be a string or a list of blocks."""
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return str(content)


class GeminiLLMProvider(LLMClient):
    """LLM client using Google Gemini API (langchain-google-genai) in JSON response mode."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.0,
    ):
        try:
            from langchain_google_genai import ChatGoogleGenerativeAI
        except ImportError as e:
            raise ImportError(
                "langchain-google-genai is required for Gemini. Install with: pip install langchain-google-genai"
            ) from e
        self._chat_cls = ChatGoogleGenerativeAI
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        # One chat model per response schema
        self._clients: dict[str, Any] = {}

    def _client_for(self, schema: dict[str, Any]) -> Any:
        key = json.dumps(schema, sort_keys=True)
        if key not in self._clients:
            self._clients[key] = self._chat_cls(
                model=self._model,
                temperature=self._temperature,
                google_api_key=self._api_key,
                response_mime_type="application/json",
                response_schema=schema,
            )
        return self._clients[key]

    # agenerate_json uses the base worker-thread default: the async gRPC client binds to
    # the event loop it was first used in, and each batch runs in a fresh loop.
    def generate_json(self, parts: list[ContentPart], schema: dict[str, Any], **kwargs: Any) -> str:
        response = self._client_for(schema).invoke([_to_message(parts)])
        return _content_text(response).strip()
