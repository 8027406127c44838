"""Pydantic schemas for the receipt extraction, submission, and review flows."""

import base64
import mimetypes
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.viaticos.utils.date_utils import is_iso_date, normalize_date

# MIME types for the accepted receipt extensions (mimetypes lacks some on minimal systems)
EXTENSION_MIME_TYPES = {
    ".xml": "application/xml",
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def new_id() -> str:
    """Fresh unique identity for extractions and expense records."""
    return str(uuid.uuid4())


class ExpenseStatus(Enum):
    """Review status of an expense record."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# --- Receipt files ---
class ReceiptUpload(BaseModel):
    """A receipt as selected by the user: raw bytes plus name and MIME type."""

    name: str
    mime_type: str = Field("", description="e.g. image/png, application/pdf, text/xml")
    content: bytes = Field(b"", repr=False)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "ReceiptUpload":
        """Read a receipt from disk; MIME type is guessed from the extension when not given."""
        path = Path(path)
        if mime_type is None:
            suffix = path.suffix.lower()
            mime_type = EXTENSION_MIME_TYPES.get(suffix) or mimetypes.guess_type(path.name)[0] or ""
        return cls(name=path.name, mime_type=mime_type, content=path.read_bytes())

    def to_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")


class ReceiptFile(BaseModel):
    """Receipt embedded in an expense record; content is base64 for transport."""

    name: str
    mime_type: str
    content: str = Field("", repr=False, description="base64-encoded file bytes")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_upload(cls, upload: ReceiptUpload) -> "ReceiptFile":
        return cls(name=upload.name, mime_type=upload.mime_type, content=upload.to_base64())

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.content)

    @property
    def is_previewable(self) -> bool:
        """Only images render inline; other types show a file-name placeholder."""
        return self.mime_type.startswith("image/")


# --- Extracted fields (model output, editable before submission) ---
class ExtractedFields(BaseModel):
    """Structured fields extracted from one receipt. Wire name of total_amount is totalAmount."""

    vendor: str = ""
    date: str = Field("", description="YYYY-MM-DD; empty if unknown")
    total_amount: float = Field(0.0, alias="totalAmount")
    currency: str = Field("", description="Currency symbol or code (e.g. $, MXN, USD)")
    category: str = Field("", description="Suggested category (e.g. Meals, Transport, Lodging, Other)")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("vendor", "currency", "category", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v):
        return normalize_date(v) or ""

    @field_validator("total_amount", mode="before")
    @classmethod
    def _amount_or_zero(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        if isinstance(v, str):
            return v.replace(",", "").replace("$", "").strip()
        return v


class ExtractedReceipt(BaseModel):
    """A successful extraction held for review/editing before submission."""

    id: str = Field(default_factory=new_id)
    upload: ReceiptUpload
    data: ExtractedFields

    @property
    def file_name(self) -> str:
        return self.upload.name


# --- Trip metadata entered once per submission ---
class TripDetails(BaseModel):
    """Employee names (one per form slot) and trip metadata shared by a submission."""

    employee_names: list[str] = Field(default_factory=lambda: [""])
    trip_name: str = ""
    trip_start_date: str = ""
    trip_end_date: str = ""


# --- Finalized expense record ---
class ExpenseRecord(BaseModel):
    """Reviewable expense: extracted fields + trip metadata + receipt + status."""

    id: str = Field(default_factory=new_id)
    employee_name: str = Field(..., description="Comma-separated display string of employee names")
    trip_name: str
    trip_start_date: str = ""
    trip_end_date: str = ""
    vendor: str = ""
    date: str = ""
    amount: float = 0.0
    currency: str = ""
    category: str = ""
    receipt_file: ReceiptFile
    status: ExpenseStatus = ExpenseStatus.PENDING

    @property
    def employee_names(self) -> list[str]:
        return [name.strip() for name in self.employee_name.split(",")]


# --- Review filters ---
class ReviewFilters(BaseModel):
    """Conjunctive review filters. Empty strings/None mean unconstrained; status defaults to Pending."""

    employee: str = ""
    trip: str = ""
    start_date: str = ""
    end_date: str = ""
    status: Optional[ExpenseStatus] = ExpenseStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status_is_all(cls, v):
        return None if v == "" else v

    @field_validator("start_date", "end_date")
    @classmethod
    def _iso_or_blank(cls, v: str) -> str:
        v = v.strip()
        if v and not is_iso_date(v):
            raise ValueError("filter dates must be YYYY-MM-DD")
        return v


class StatusSummary(BaseModel):
    """Count and amount of expenses in one status."""

    status: ExpenseStatus
    count: int = 0
    amount: float = 0.0
