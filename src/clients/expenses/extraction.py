"""Receipt extraction: build the request for one file and invoke the LLM seam.

The invoker never raises past its boundary. Every outcome is an
``ExtractionResult`` carrying either the parsed fields or a classified
``ExtractionFailure``.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError

from src.viaticos.config import ViaticosSettings, get_settings
from src.viaticos.deps import get_llm
from src.viaticos.exceptions import APIKeyError, UnsupportedFileTypeError
from src.viaticos.llm.base import ContentPart, LLMClient, MediaPart, TextPart
from src.viaticos.utils.error_utils import (
    is_invalid_api_key_error,
    is_permission_error,
    is_quota_error,
)
from src.viaticos.utils.json_utils import parse_json_from_text

from .prompts import EXTRACTION_INSTRUCTION, EXTRACTION_RESPONSE_SCHEMA, pdf_instruction, xml_instruction
from .schemas import ExtractedFields, ReceiptUpload

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
XML_MIME_TYPES = ("application/xml", "text/xml")


class FailureReason(Enum):
    """Why a receipt could not be extracted."""
    MISSING_API_KEY = "missing_api_key"
    INVALID_API_KEY = "invalid_api_key"
    PERMISSION_DENIED = "permission_denied"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    PARSE_ERROR = "parse_error"
    UNKNOWN = "unknown"


FAILURE_MESSAGES = {
    FailureReason.MISSING_API_KEY: "The AI service API key is not configured. Set GOOGLE_API_KEY and try again.",
    FailureReason.INVALID_API_KEY: "The AI service rejected the API key. Check that GOOGLE_API_KEY is valid.",
    FailureReason.PERMISSION_DENIED: "The API key does not have permission to use the AI model.",
    FailureReason.QUOTA_EXCEEDED: "The AI service quota was exceeded. Wait a moment and try again.",
    FailureReason.UNSUPPORTED_FILE_TYPE: "Unsupported file type. Upload an image, PDF, or XML receipt.",
    FailureReason.PARSE_ERROR: "The AI service returned a response that could not be read as receipt data.",
    FailureReason.UNKNOWN: "An unexpected error occurred while extracting the receipt. Check the logs for details.",
}


@dataclass(frozen=True)
class ExtractionFailure:
    """Classified failure with a user-facing message and the underlying detail for diagnostics."""

    reason: FailureReason
    message: str
    detail: str = ""

    @classmethod
    def of(cls, reason: FailureReason, detail: str = "") -> "ExtractionFailure":
        return cls(reason=reason, message=FAILURE_MESSAGES[reason], detail=detail)


class ExtractionResult:
    """Result of extracting one receipt: data on success, failure otherwise."""

    def __init__(
        self,
        file_name: str,
        data: Optional[ExtractedFields] = None,
        failure: Optional[ExtractionFailure] = None,
    ):
        self.file_name = file_name
        self.data = data
        self.failure = failure

    @classmethod
    def failed(cls, file_name: str, reason: FailureReason, detail: str = "") -> "ExtractionResult":
        return cls(file_name, failure=ExtractionFailure.of(reason, detail))

    @property
    def ok(self) -> bool:
        return self.data is not None and self.failure is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "data": self.data.model_dump(by_alias=True) if self.data else None,
            "error": self.failure.message if self.failure else None,
            "reason": self.failure.reason.value if self.failure else None,
        }


@dataclass(frozen=True)
class ExtractionRequest:
    """Payload for the generation call: ordered content parts plus the response schema."""

    file_name: str
    mime_type: str
    parts: list[ContentPart]
    response_schema: dict[str, Any]


def build_extraction_request(upload: ReceiptUpload) -> ExtractionRequest:
    """Choose the payload shape from the MIME type.

    Raises:
        UnsupportedFileTypeError: MIME type is not image/*, PDF, or XML
    """
    mime_type = (upload.mime_type or "").lower()
    if mime_type.startswith("image/"):
        parts: list[ContentPart] = [
            MediaPart(data=upload.to_base64(), mime_type=upload.mime_type),
            TextPart(text=EXTRACTION_INSTRUCTION),
        ]
    elif mime_type in XML_MIME_TYPES:
        xml_text = upload.content.decode("utf-8", errors="replace")
        parts = [TextPart(text=xml_instruction(xml_text))]
    elif mime_type == PDF_MIME_TYPE:
        parts = [
            MediaPart(data=upload.to_base64(), mime_type=upload.mime_type),
            TextPart(text=pdf_instruction()),
        ]
    else:
        raise UnsupportedFileTypeError(upload.name, upload.mime_type)
    return ExtractionRequest(
        file_name=upload.name,
        mime_type=upload.mime_type,
        parts=parts,
        response_schema=EXTRACTION_RESPONSE_SCHEMA,
    )


def classify_error(exc: Exception) -> FailureReason:
    """Map an exception raised by the LLM seam to a FailureReason."""
    if isinstance(exc, APIKeyError):
        return FailureReason.MISSING_API_KEY
    if isinstance(exc, UnsupportedFileTypeError):
        return FailureReason.UNSUPPORTED_FILE_TYPE
    if is_invalid_api_key_error(exc):
        return FailureReason.INVALID_API_KEY
    if is_permission_error(exc):
        return FailureReason.PERMISSION_DENIED
    if is_quota_error(exc):
        return FailureReason.QUOTA_EXCEEDED
    return FailureReason.UNKNOWN


def parse_extracted_fields(text: str) -> ExtractedFields:
    """Parse the raw response text into ExtractedFields.

    Raises:
        ValueError: No JSON object, a required key is missing, or a value has the wrong type
    """
    data = parse_json_from_text(text)
    if data is None:
        raise ValueError(f"No JSON object in response: {(text or '')[:200]!r}")
    missing = [k for k in EXTRACTION_RESPONSE_SCHEMA["required"] if k not in data]
    if missing:
        raise ValueError(f"Response is missing required fields: {', '.join(missing)}")
    try:
        return ExtractedFields.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Response fields are invalid: {e}") from e


class ReceiptExtractor:
    """Extract fields from receipts through an LLMClient.

    Pass ``llm`` to use a specific client (tests, custom providers). Otherwise
    the client is built lazily from settings via ``llm_factory``, and only when
    a credential is configured.
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        settings: Optional[ViaticosSettings] = None,
        llm_factory: Callable[[ViaticosSettings], LLMClient] = get_llm,
    ):
        self._llm = llm
        self._settings = settings
        self._llm_factory = llm_factory

    @property
    def settings(self) -> ViaticosSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _client(self) -> LLMClient:
        """Return the LLM client. Raises APIKeyError before any client exists if no key is set."""
        if self._llm is not None:
            return self._llm
        if not self.settings.has_api_key:
            raise APIKeyError("Gemini", "GOOGLE_API_KEY")
        self._llm = self._llm_factory(self.settings)
        return self._llm

    async def aextract(self, upload: ReceiptUpload) -> ExtractionResult:
        try:
            request = build_extraction_request(upload)
        except UnsupportedFileTypeError as e:
            logger.warning("Skipping %s: %s", upload.name, e)
            return ExtractionResult.failed(upload.name, FailureReason.UNSUPPORTED_FILE_TYPE, str(e))

        try:
            llm = self._client()
            raw = await llm.agenerate_json(request.parts, request.response_schema)
        except Exception as e:
            reason = classify_error(e)
            logger.warning("Extraction failed for %s (%s): %s", upload.name, reason.value, e)
            return ExtractionResult.failed(upload.name, reason, str(e))

        try:
            fields = parse_extracted_fields(raw)
        except ValueError as e:
            logger.warning("Could not parse extraction for %s: %s", upload.name, e)
            return ExtractionResult.failed(upload.name, FailureReason.PARSE_ERROR, str(e))

        logger.info("Extracted %s: vendor=%r amount=%s", upload.name, fields.vendor, fields.total_amount)
        return ExtractionResult(upload.name, data=fields)

    def extract(self, upload: ReceiptUpload) -> ExtractionResult:
        """Sync wrapper around aextract (for CLI and scripts)."""
        return asyncio.run(self.aextract(upload))
